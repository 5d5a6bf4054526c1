"""
Notes View State.

Keeps the client-visible note list consistent with the user's filters and
with server-confirmed state.

Reload protocol: every filter change and every completed mutation issues a
full list fetch with the current filters and replaces the list wholesale.
A reload that is superseded by a newer one drops its response.

Failures never escape as exceptions; they are reported through the
notifier so the front end can show them.
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

from scribe.backend.core.logging import get_logger, log_with_source
from scribe.backend.domain.enums import Mood, is_valid_progress, progress_label
from scribe.client.gateway import NotesClient, RequestFailed
from scribe.client.normalize import ClientNote, normalize, sort_notes

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    """User-visible message about an action's outcome."""

    level: Literal["info", "error"]
    title: str
    description: str = ""


Notifier = Callable[[Notification], None]


def log_notifier(notification: Notification) -> None:
    """Default notifier: write the notification to the log."""
    level = "error" if notification.level == "error" else "info"
    log_with_source(
        logger,
        "client",
        level,
        notification.title,
        description=notification.description,
    )


@dataclass
class NoteFilters:
    """Current list filters."""

    search: str = ""
    tags: list[str] = field(default_factory=list)
    archived: bool = False
    mood: Mood | None = None

    def as_params(self) -> dict[str, Any]:
        return {
            "q": self.search.strip() or None,
            "tags": list(self.tags) or None,
            "archived": self.archived,
            "mood": self.mood.value if self.mood else None,
        }


class NotesView:
    """
    List view over the notes API.

    Usage:
        view = NotesView(client, notify=toast)
        await view.reload()
        await view.set_search("groceries")
        await view.toggle_pin(note_id)
        for note in view.notes:
            ...
    """

    def __init__(self, client: NotesClient, notify: Notifier = log_notifier) -> None:
        self.client = client
        self.notify = notify
        self.filters = NoteFilters()
        self.notes: list[ClientNote] = []
        self.available_tags: list[str] = []
        self.loading = False
        self._generation = 0

    def _fail(self, title: str, error: RequestFailed) -> None:
        self.notify(Notification("error", title, error.message))

    def find(self, note_id: str) -> ClientNote | None:
        return next((note for note in self.notes if note.id == note_id), None)

    def track_progress(self, note_id: str) -> "ProgressTracker | None":
        """
        Progress tracker for a listed note that reloads the list once the
        server confirms a value.

        Returns:
            None when the note is not in the current list
        """
        note = self.find(note_id)
        if note is None:
            self.notify(Notification("error", "Note not in list", note_id))
            return None
        return ProgressTracker(
            self.client,
            note,
            notify=self.notify,
            on_confirmed=self._progress_confirmed,
        )

    async def _progress_confirmed(self, note: ClientNote) -> None:
        await self.reload()

    async def reload(self) -> bool:
        """
        Fetch the list for the current filters and replace it.

        Returns:
            True when this reload's result was applied
        """
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            raw_notes = await self.client.list_notes(**self.filters.as_params())
        except RequestFailed as e:
            if generation == self._generation:
                self.loading = False
                self._fail("Could not load notes", e)
            return False

        if generation != self._generation:
            log_with_source(logger, "client", "debug", "Dropped stale list response")
            return False

        self.notes = sort_notes(normalize(raw) for raw in raw_notes)
        self.loading = False
        return True

    async def load_tags(self) -> list[str]:
        try:
            self.available_tags = await self.client.list_tags()
        except RequestFailed as e:
            self._fail("Could not load tags", e)
        return self.available_tags

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    async def set_search(self, text: str) -> None:
        self.filters.search = text
        await self.reload()

    async def set_tags(self, tags: Iterable[str]) -> None:
        self.filters.tags = list(dict.fromkeys(tags))
        await self.reload()

    async def toggle_tag(self, tag: str) -> None:
        if tag in self.filters.tags:
            tags = [t for t in self.filters.tags if t != tag]
        else:
            tags = [*self.filters.tags, tag]
        await self.set_tags(tags)

    async def set_archived(self, archived: bool) -> None:
        self.filters.archived = archived
        await self.reload()

    async def set_mood(self, mood: Mood | str | None) -> None:
        self.filters.mood = Mood.parse(mood) if mood is not None else None
        await self.reload()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def _mutate(
        self,
        failure_title: str,
        action: Awaitable[dict[str, Any]],
    ) -> ClientNote | None:
        try:
            raw = await action
        except RequestFailed as e:
            self._fail(failure_title, e)
            return None
        await self.reload()
        await self.load_tags()
        return normalize(raw) if raw is not None else None

    async def create(
        self,
        content: str,
        title: str = "",
        tags: Iterable[str] = (),
        mood: Mood | None = None,
    ) -> ClientNote | None:
        data: dict[str, Any] = {"title": title, "content": content, "tags": list(tags)}
        if mood is not None:
            data["mood"] = mood.value
        note = await self._mutate("Could not create note", self.client.create_note(data))
        if note is not None:
            self.notify(Notification("info", "Note created", note.title))
        return note

    async def save(self, note_id: str, patch: dict[str, Any]) -> ClientNote | None:
        note = await self._mutate("Could not update note", self.client.update_note(note_id, patch))
        if note is not None:
            self.notify(Notification("info", "Note saved", note.title))
        return note

    async def toggle_pin(self, note_id: str) -> ClientNote | None:
        note = await self._mutate("Could not pin/unpin note", self.client.toggle_pin(note_id))
        if note is not None:
            if note.pinned:
                self.notify(Notification("info", "Note pinned", "Added to highlights"))
            else:
                self.notify(Notification("info", "Note unpinned", "Removed from highlights"))
        return note

    async def toggle_archive(self, note_id: str) -> ClientNote | None:
        note = await self._mutate(
            "Could not archive/unarchive note", self.client.toggle_archive(note_id)
        )
        if note is not None:
            if note.archived:
                self.notify(Notification("info", "Note archived", note.title))
            else:
                self.notify(Notification("info", "Note restored", note.title))
        return note

    async def delete(self, note_id: str) -> bool:
        try:
            await self.client.delete_note(note_id)
        except RequestFailed as e:
            self._fail("Could not delete note", e)
            return False
        await self.reload()
        await self.load_tags()
        self.notify(Notification("info", "Note deleted", "The note was removed"))
        return True


class ProgressTracker:
    """
    Progress indicator for one note with optimistic updates.

    The confirmed value is only replaced by a server response. A pending
    value is shown while a request is in flight and discarded if it fails.
    on_confirmed is awaited with the server's note after a successful commit.
    """

    def __init__(
        self,
        client: NotesClient,
        note: ClientNote,
        notify: Notifier = log_notifier,
        on_confirmed: Callable[[ClientNote], Awaitable[Any]] | None = None,
    ) -> None:
        self.client = client
        self.on_confirmed = on_confirmed
        self.note_id = note.id
        self.confirmed = note.progress
        self.pending: int | None = None
        self.notify = notify

    @property
    def value(self) -> int:
        return self.pending if self.pending is not None else self.confirmed

    @property
    def label(self) -> str:
        return progress_label(self.value)

    async def commit(self, value: int) -> bool:
        """
        Show `value` immediately and confirm it with the server.

        Returns:
            True when the server accepted the value
        """
        if not is_valid_progress(value):
            self.notify(Notification("error", "Invalid progress value", str(value)))
            return False

        self.pending = value
        try:
            raw = await self.client.set_progress(self.note_id, value)
        except RequestFailed as e:
            if self.pending == value:
                self.pending = None
            self.notify(Notification("error", "Could not update progress", e.message))
            return False

        if self.pending == value:
            self.pending = None
        note = normalize(raw)
        self.confirmed = note.progress
        if self.on_confirmed is not None:
            await self.on_confirmed(note)
        return True
