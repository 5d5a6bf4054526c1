# Pydantic schemas package
from scribe.backend.schemas.base import ErrorResponse, HealthResponse
from scribe.backend.schemas.note import (
    Attachment,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    ProgressUpdate,
)

__all__ = [
    "Attachment",
    "ErrorResponse",
    "HealthResponse",
    "NoteCreate",
    "NoteResponse",
    "NoteUpdate",
    "ProgressUpdate",
]
