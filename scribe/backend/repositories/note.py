"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model, including translation of NoteFilter values
into SQL where-clauses.
"""

from typing import Any

from sqlalchemy import ColumnElement, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.backend.core.database import casefold
from scribe.backend.core.utils import utc_now
from scribe.backend.domain.query import NoteFilter
from scribe.backend.models.note import Note, NoteTag
from scribe.backend.repositories.base import BaseRepository


def filter_clauses(note_filter: NoteFilter) -> list[ColumnElement[bool]]:
    """
    Where-clauses for a NoteFilter, to be ANDed together.

    An empty filter yields no clauses (match all).
    """
    clauses: list[ColumnElement[bool]] = []

    if note_filter.archived is not None:
        clauses.append(Note.archived == note_filter.archived)

    if note_filter.text:
        folded = note_filter.text.casefold()
        clauses.append(
            or_(
                casefold(Note.title).contains(folded, autoescape=True),
                casefold(Note.content).contains(folded, autoescape=True),
            )
        )

    for tag in note_filter.tags:
        clauses.append(Note.tag_links.any(NoteTag.tag == tag))

    if note_filter.moods:
        clauses.append(Note.mood.in_(note_filter.moods))

    return clauses


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries. Every mutation refreshes updated_at,
    including tag-only changes that touch no column of the notes table.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_filtered(self, note_filter: NoteFilter) -> list[Note]:
        """
        List notes matching a filter.

        Pinned notes come first, then most recently updated.
        """
        result = await self.session.execute(
            select(Note)
            .where(*filter_clauses(note_filter))
            .order_by(Note.pinned.desc(), Note.updated_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, id: str, **kwargs: Any) -> Note:
        """Update fields and refresh updated_at."""
        return await super().update(id, **{**kwargs, "updated_at": utc_now()})

    async def toggle_pinned(self, id: str) -> Note:
        note = await self.get_by_id(id)
        return await self.update(id, pinned=not note.pinned)

    async def toggle_archived(self, id: str) -> Note:
        note = await self.get_by_id(id)
        return await self.update(id, archived=not note.archived)

    async def set_progress(self, id: str, progress: int) -> Note:
        return await self.update(id, progress=progress)

    async def distinct_tags(self) -> list[str]:
        """All tags across all notes, deduplicated and sorted ascending."""
        result = await self.session.execute(select(NoteTag.tag).distinct())
        return sorted(result.scalars().all())
