"""
Note Query Builder.

Turns raw list-filter parameters into an immutable NoteFilter. The
repository translates a NoteFilter into SQL where-clauses.

Malformed parameters never raise; they degrade to "no restriction".
"""

from dataclasses import dataclass

from scribe.backend.domain.enums import mood_aliases


@dataclass(frozen=True)
class NoteFilter:
    """
    Conjunction of optional note restrictions.

    Attributes:
        archived: Required archived flag, or None for both states
        text: Case-insensitive substring to find in title or content
        tags: Tags the note must all carry
        moods: Stored mood values accepted (canonical plus alias)
    """

    archived: bool | None = None
    text: str | None = None
    tags: tuple[str, ...] = ()
    moods: tuple[str, ...] = ()


def parse_archived(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() == "true"


def parse_tags(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag list, trimming and dropping empties."""
    if not value:
        return ()
    return tuple(tag for tag in (part.strip() for part in value.split(",")) if tag)


def build_filter(
    q: str | None = None,
    tags: str | None = None,
    archived: str | None = None,
    mood: str | None = None,
) -> NoteFilter:
    """
    Build a NoteFilter from list query parameters.

    Args:
        q: Free text matched against title or content
        tags: Comma-separated tags, all required
        archived: "true"/"false"; absent means both states
        mood: Canonical mood or retired alias; unknown values match literally

    Returns:
        NoteFilter; empty when no parameter is given
    """
    return NoteFilter(
        archived=parse_archived(archived),
        text=q or None,
        tags=parse_tags(tags),
        moods=mood_aliases(mood) if mood else (),
    )
