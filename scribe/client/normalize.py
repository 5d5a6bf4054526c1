"""
Note Normalization.

Single boundary where raw JSON notes from the API become ClientNote
values. Nothing else on the client handles raw records.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from scribe.backend.domain.enums import (
    DEFAULT_MOOD,
    DEFAULT_PROGRESS,
    Mood,
    is_valid_progress,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ClientNote(BaseModel):
    """Canonical client-side note. Every field is populated."""

    id: str
    title: str = ""
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    archived: bool = False
    pinned: bool = False
    mood: Mood = DEFAULT_MOOD
    progress: int = DEFAULT_PROGRESS
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _as_progress(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_PROGRESS
    if isinstance(value, str):
        value = value.strip()
        if not value.lstrip("-").isdigit():
            return DEFAULT_PROGRESS
        value = int(value)
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    return value if is_valid_progress(value) else DEFAULT_PROGRESS


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are taken as UTC. Returns None when unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def normalize(raw: dict[str, Any]) -> ClientNote:
    """
    Turn a raw API note into a ClientNote.

    - `_id` is accepted in place of `id`
    - tags/attachments default to empty lists
    - archived/pinned are coerced to booleans
    - unknown or missing mood becomes the neutral default; retired
      names map to their canonical value
    - progress outside 0/25/50/75/100 becomes 0
    - missing updatedAt becomes now; unparseable timestamps become None
    """
    tags = raw.get("tags")
    attachments = raw.get("attachments")
    updated_raw = raw.get("updatedAt", raw.get("updated_at"))

    return ClientNote(
        id=str(raw.get("id") or raw.get("_id") or ""),
        title=str(raw.get("title") or ""),
        content=str(raw.get("content") or ""),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        attachments=[a for a in attachments if isinstance(a, dict)]
        if isinstance(attachments, list)
        else [],
        archived=_as_bool(raw.get("archived", False)),
        pinned=_as_bool(raw.get("pinned", False)),
        mood=Mood.parse(raw.get("mood")) or DEFAULT_MOOD,
        progress=_as_progress(raw.get("progress")),
        created_at=parse_timestamp(raw.get("createdAt", raw.get("created_at"))),
        updated_at=(
            datetime.now(timezone.utc) if updated_raw is None else parse_timestamp(updated_raw)
        ),
    )


def sort_notes(notes: Iterable[ClientNote]) -> list[ClientNote]:
    """Pinned first, then most recently updated; missing timestamps sort last."""
    return sorted(
        notes,
        key=lambda note: (not note.pinned, -(note.updated_at or EPOCH).timestamp()),
    )
