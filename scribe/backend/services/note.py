"""
Note Service.

Business logic layer for notes: entity defaults, title derivation,
content validation, and the targeted pin/archive/progress actions.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from scribe.backend.core.exceptions import InvalidArgumentError, ValidationError
from scribe.backend.domain.content import derive_title, is_blank, validate_content
from scribe.backend.domain.enums import (
    DEFAULT_MOOD,
    DEFAULT_PROGRESS,
    PROGRESS_VALUES,
    is_valid_progress,
)
from scribe.backend.domain.query import NoteFilter
from scribe.backend.models.note import Note
from scribe.backend.repositories.note import NoteRepository
from scribe.backend.schemas.note import NoteCreate, NoteUpdate
from scribe.backend.services.base import BaseService

EMPTY_CONTENT_MESSAGE = "Content cannot be empty"


def _check_content(content: str) -> None:
    if not validate_content(content):
        raise ValidationError(
            EMPTY_CONTENT_MESSAGE,
            details={"content": EMPTY_CONTENT_MESSAGE},
        )


class NoteService(BaseService):
    """
    Service for note business logic.

    Blank titles are derived from content before content is validated,
    so an empty note fails validation rather than receiving a title.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Args:
            data: Note creation data

        Returns:
            Created note with generated id and timestamps

        Raises:
            ValidationError: If content has no visible text
        """
        title = data.title.strip()
        if not title:
            title = derive_title(data.content)
        _check_content(data.content)

        self._log_operation("Creating note", title=title, tags=data.tags)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                title=title,
                content=data.content,
                tags=data.tags,
                attachments=[a.model_dump(exclude_none=True) for a in data.attachments],
                mood=(data.mood or DEFAULT_MOOD).value,
                progress=DEFAULT_PROGRESS if data.progress is None else data.progress,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            InvalidIdError: If the ID is malformed
            NotFoundError: If note not found
        """
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id(note_id),
        )

    async def list_notes(self, note_filter: NoteFilter) -> list[Note]:
        """
        List notes matching a filter, pinned first then most recent.

        Args:
            note_filter: Built by build_filter(); empty matches all
        """
        self._log_debug("Listing notes", filter=note_filter)
        return await self._execute_db_operation(
            "list_notes",
            self.repo.list_filtered(note_filter),
        )

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Merge a patch into a note.

        Fields present in the patch overwrite stored values; absent fields
        are untouched. updated_at is refreshed even for an empty patch.

        Raises:
            InvalidIdError: If the ID is malformed
            NotFoundError: If note not found
            ValidationError: If the patched content has no visible text
        """
        patch = self._patch_fields(data)
        note = await self.get_note(note_id)

        content = patch.get("content", note.content)
        if "content" in patch:
            _check_content(content)
        if "title" in patch and is_blank(patch["title"]):
            patch["title"] = derive_title(content)

        self._log_operation("Updating note", note_id=note_id, fields=list(patch))

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **patch),
        )

    @staticmethod
    def _patch_fields(data: NoteUpdate) -> dict[str, Any]:
        patch = data.model_dump(exclude_unset=True, exclude_none=True)
        if data.mood is not None:
            patch["mood"] = data.mood.value
        if "title" in patch:
            patch["title"] = patch["title"].strip()
        return patch

    async def toggle_pin(self, note_id: str) -> Note:
        """
        Flip the pinned flag.

        Raises:
            InvalidIdError: If the ID is malformed
            NotFoundError: If note not found
        """
        self._log_operation("Toggling pin", note_id=note_id)
        return await self._execute_db_operation(
            "toggle_pin",
            self.repo.toggle_pinned(note_id),
        )

    async def toggle_archive(self, note_id: str) -> Note:
        """
        Flip the archived flag.

        Raises:
            InvalidIdError: If the ID is malformed
            NotFoundError: If note not found
        """
        self._log_operation("Toggling archive", note_id=note_id)
        return await self._execute_db_operation(
            "toggle_archive",
            self.repo.toggle_archived(note_id),
        )

    async def set_progress(self, note_id: str, value: int) -> Note:
        """
        Set the progress value.

        Raises:
            InvalidArgumentError: If value is not one of 0, 25, 50, 75, 100
            InvalidIdError: If the ID is malformed
            NotFoundError: If note not found
        """
        if not is_valid_progress(value):
            raise InvalidArgumentError(
                f"Invalid progress value {value!r}; allowed: {list(PROGRESS_VALUES)}"
            )

        self._log_operation("Setting progress", note_id=note_id, progress=value)
        return await self._execute_db_operation(
            "set_progress",
            self.repo.set_progress(note_id, value),
        )

    async def delete_note(self, note_id: str) -> None:
        """
        Permanently delete a note.

        Raises:
            InvalidIdError: If the ID is malformed
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)

        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )

    async def list_tags(self) -> list[str]:
        """Distinct tags across all notes, archived or not, sorted ascending."""
        return await self._execute_db_operation(
            "list_tags",
            self.repo.distinct_tags(),
        )
