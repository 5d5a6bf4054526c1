"""
Notes Commands.

List, read, write and organize notes through the notes API.
All commands go through NotesView, so every change is followed by a
fresh list fetch and outcomes are reported as notifications.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

import typer

from scribe.backend.domain.enums import PROGRESS_VALUES, Mood
from scribe.cli.render import console, note_panel, notes_table, print_notification
from scribe.client.gateway import NotesClient, RequestFailed
from scribe.client.normalize import normalize
from scribe.client.view_state import NotesView, ProgressTracker

app = typer.Typer(help="Manage notes", no_args_is_help=True)

T = TypeVar("T")

FULL_ID_LENGTH = 36


def _api_url(ctx: typer.Context) -> str | None:
    return (ctx.obj or {}).get("api_url")


def _parse_mood(value: str | None) -> Mood | None:
    if value is None:
        return None
    mood = Mood.parse(value)
    if mood is None:
        choices = ", ".join(m.value for m in Mood)
        raise typer.BadParameter(f"unknown mood {value!r} (choose from {choices})")
    return mood


def _run(ctx: typer.Context, action: Callable[[NotesView], Awaitable[T]]) -> T:
    """Run `action` against a fresh view and close the client afterwards."""

    async def runner() -> T:
        async with NotesClient(base_url=_api_url(ctx)) as client:
            view = NotesView(client, notify=print_notification)
            return await action(view)

    return asyncio.run(runner())


async def _resolve_id(view: NotesView, note_id: str) -> str:
    """
    Expand a short id prefix (as shown by `notes list`) to a full id.

    Both active and archived notes are searched.
    """
    if len(note_id) >= FULL_ID_LENGTH:
        return note_id

    try:
        active = await view.client.list_notes(archived=False)
        archived = await view.client.list_notes(archived=True)
    except RequestFailed as e:
        console.print(f"[red]Could not load notes[/red] [dim]{e.message}[/dim]")
        raise typer.Exit(1)

    matches = {str(raw.get("id")) for raw in active + archived if str(raw.get("id", "")).startswith(note_id)}
    if len(matches) == 1:
        return matches.pop()
    if not matches:
        console.print(f"[red]No note matches {note_id!r}[/red]")
    else:
        console.print(f"[red]Id prefix {note_id!r} is ambiguous[/red]")
    raise typer.Exit(1)


def _exit_on_failure(result: Any) -> None:
    if result is None or result is False:
        raise typer.Exit(1)


@app.command("list")
def list_notes(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-q", help="Text to search in title and content"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Only notes with this tag (repeatable)"),
    archived: bool = typer.Option(False, "--archived", "-a", help="Show archived notes"),
    mood: Optional[str] = typer.Option(None, "--mood", "-m", help="Only notes with this mood"),
) -> None:
    """
    List notes, pinned first, then most recently updated.

    Examples:
        scribe notes list
        scribe notes list -q groceries -t home -t urgent
        scribe notes list --archived --mood happy
    """
    mood_value = _parse_mood(mood)

    async def action(view: NotesView) -> NotesView | None:
        view.filters.search = search
        view.filters.tags = list(dict.fromkeys(tag))
        view.filters.archived = archived
        view.filters.mood = mood_value
        return view if await view.reload() else None

    view = _run(ctx, action)
    if view is None:
        raise typer.Exit(1)
    if not view.notes:
        console.print("[dim]No notes found[/dim]")
        return
    console.print(notes_table(view.notes, title="Archived notes" if archived else "Notes"))


@app.command()
def show(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Show one note."""

    async def action(view: NotesView) -> dict[str, Any] | None:
        full_id = await _resolve_id(view, note_id)
        try:
            return await view.client.get_note(full_id)
        except RequestFailed as e:
            console.print(f"[red]Could not load note[/red] [dim]{e.message}[/dim]")
            return None

    raw = _run(ctx, action)
    _exit_on_failure(raw)
    console.print(note_panel(normalize(raw)))


@app.command()
def new(
    ctx: typer.Context,
    content: str = typer.Argument(..., help="Note content (HTML or plain text)"),
    title: str = typer.Option("", "--title", help="Title; derived from the content when omitted"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)"),
    mood: Optional[str] = typer.Option(None, "--mood", "-m", help="Mood"),
) -> None:
    """
    Create a note.

    Examples:
        scribe notes new "<p>Buy milk</p>" -t home
        scribe notes new "Plan the trip" --title Trip --mood excited
    """
    mood_value = _parse_mood(mood)
    note = _run(
        ctx,
        lambda view: view.create(content, title=title, tags=list(dict.fromkeys(tag)), mood=mood_value),
    )
    _exit_on_failure(note)
    console.print(f"[dim]{note.id}[/dim]")


@app.command()
def edit(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New content"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Replace tags (repeatable)"),
    mood: Optional[str] = typer.Option(None, "--mood", "-m", help="New mood"),
) -> None:
    """Change fields of a note; omitted options are left unchanged."""
    patch: dict[str, Any] = {}
    if title is not None:
        patch["title"] = title
    if content is not None:
        patch["content"] = content
    if tag:
        patch["tags"] = list(dict.fromkeys(tag))
    mood_value = _parse_mood(mood)
    if mood_value is not None:
        patch["mood"] = mood_value.value
    if not patch:
        console.print("[yellow]Nothing to change[/yellow]")
        raise typer.Exit(1)

    async def action(view: NotesView):
        return await view.save(await _resolve_id(view, note_id), patch)

    _exit_on_failure(_run(ctx, action))


@app.command()
def pin(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Pin or unpin a note."""

    async def action(view: NotesView):
        return await view.toggle_pin(await _resolve_id(view, note_id))

    _exit_on_failure(_run(ctx, action))


@app.command()
def archive(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Archive or restore a note."""

    async def action(view: NotesView):
        return await view.toggle_archive(await _resolve_id(view, note_id))

    _exit_on_failure(_run(ctx, action))


@app.command()
def progress(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    value: int = typer.Argument(..., help=f"One of {', '.join(str(v) for v in PROGRESS_VALUES)}"),
) -> None:
    """Set a note's progress."""

    async def action(view: NotesView) -> ProgressTracker | None:
        full_id = await _resolve_id(view, note_id)
        try:
            raw = await view.client.get_note(full_id)
        except RequestFailed as e:
            console.print(f"[red]Could not load note[/red] [dim]{e.message}[/dim]")
            return None
        tracker = ProgressTracker(view.client, normalize(raw), notify=print_notification)
        if not await tracker.commit(value):
            return None
        return tracker

    tracker = _run(ctx, action)
    _exit_on_failure(tracker)
    console.print(f"[green]{tracker.label}[/green] [dim]{tracker.value}%[/dim]")


@app.command()
def delete(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a note permanently."""
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)

    async def action(view: NotesView) -> bool:
        return await view.delete(await _resolve_id(view, note_id))

    _exit_on_failure(_run(ctx, action))


@app.command()
def tags(ctx: typer.Context) -> None:
    """List every tag in use, sorted."""

    async def action(view: NotesView) -> list[str] | None:
        try:
            return await view.client.list_tags()
        except RequestFailed as e:
            console.print(f"[red]Could not load tags[/red] [dim]{e.message}[/dim]")
            return None

    result = _run(ctx, action)
    if result is None:
        raise typer.Exit(1)
    if not result:
        console.print("[dim]No tags yet[/dim]")
        return
    console.print(" ".join(f"[cyan]#{t}[/cyan]" for t in result))
