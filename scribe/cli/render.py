"""
Rich rendering helpers for the notes CLI.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from scribe.backend.domain.content import reading_time, strip_to_plain_text
from scribe.backend.domain.enums import progress_label
from scribe.client.normalize import ClientNote
from scribe.client.view_state import Notification

console = Console()

MOOD_STYLES = {
    "feliz": "yellow",
    "neutro": "bright_black",
    "triste": "blue",
    "animado": "magenta",
    "deboa": "green",
}

PROGRESS_STYLES = {
    0: "white",
    25: "red",
    50: "yellow",
    75: "dark_orange",
    100: "green",
}


def print_notification(notification: Notification) -> None:
    """Notifier that prints to the console."""
    if notification.level == "error":
        console.print(f"[red]{notification.title}[/red] [dim]{notification.description}[/dim]")
    else:
        console.print(f"[green]{notification.title}[/green] [dim]{notification.description}[/dim]")


def _when(note: ClientNote) -> str:
    if note.updated_at is None:
        return ""
    return note.updated_at.strftime("%Y-%m-%d %H:%M")


def notes_table(notes: list[ClientNote], title: str = "Notes") -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("", width=2)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Tags")
    table.add_column("Mood")
    table.add_column("Progress")
    table.add_column("Updated", style="dim")

    for note in notes:
        mood_style = MOOD_STYLES.get(note.mood.value, "white")
        progress_style = PROGRESS_STYLES.get(note.progress, "white")
        table.add_row(
            "📌" if note.pinned else "",
            note.id[:8],
            note.title or "Untitled",
            " ".join(f"#{tag}" for tag in note.tags),
            f"[{mood_style}]{note.mood.value}[/{mood_style}]",
            f"[{progress_style}]{progress_label(note.progress)} • {note.progress}%[/{progress_style}]",
            _when(note),
        )
    return table


def note_panel(note: ClientNote) -> Panel:
    text = strip_to_plain_text(note.content)
    lines = [
        f"[dim]{note.id}[/dim]",
        f"Mood: {note.mood.value}   Progress: {progress_label(note.progress)} ({note.progress}%)",
        f"Tags: {' '.join(f'#{tag}' for tag in note.tags) or '-'}",
        f"{reading_time(note.content)} min read   Updated: {_when(note) or '-'}",
        "",
        text,
    ]
    flags = []
    if note.pinned:
        flags.append("pinned")
    if note.archived:
        flags.append("archived")
    subtitle = ", ".join(flags) or None
    return Panel("\n".join(lines), title=note.title or "Untitled", subtitle=subtitle)
