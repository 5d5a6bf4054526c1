# SQLAlchemy models package
from scribe.backend.models.base import Base
from scribe.backend.models.note import Note, NoteTag

__all__ = ["Base", "Note", "NoteTag"]
