"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from scribe.backend.domain.enums import PROGRESS_VALUES, Mood


class Attachment(BaseModel):
    """File, image or link attached to a note."""

    type: Literal["image", "link", "file"]
    url: str | None = None
    name: str | None = None


def _parse_mood(value: Any) -> Mood | None:
    if value is None:
        return None
    mood = Mood.parse(value)
    if mood is None:
        raise ValueError(f"mood must be one of {', '.join(m.value for m in Mood)}")
    return mood


def _check_progress(value: int | None) -> int | None:
    if value is not None and value not in PROGRESS_VALUES:
        raise ValueError(f"progress must be one of {list(PROGRESS_VALUES)}")
    return value


MoodInput = Annotated[Mood | None, BeforeValidator(_parse_mood)]
ProgressInput = Annotated[int | None, AfterValidator(_check_progress)]


class NoteCreate(BaseModel):
    """
    Schema for creating a new note.

    A blank title is derived from the content on save. Content emptiness
    is checked by the service so it surfaces as a ValidationError.
    """

    title: str = Field(
        default="",
        max_length=255,
        description="Note title; derived from content when blank",
        examples=["Groceries"],
    )
    content: str = Field(
        default="",
        description="Rich-text (HTML) content",
        examples=["<p>Milk, eggs</p>"],
    )
    tags: list[str] = Field(default_factory=list, description="Tags in display order")
    attachments: list[Attachment] = Field(default_factory=list)
    mood: MoodInput = Field(default=None, description="Canonical mood or retired alias")
    progress: ProgressInput = Field(default=None, description="One of 0, 25, 50, 75, 100")


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    Only fields present in the request body are written.
    """

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    tags: list[str] | None = None
    attachments: list[Attachment] | None = None
    archived: bool | None = None
    pinned: bool | None = None
    mood: MoodInput = None
    progress: ProgressInput = None


class ProgressUpdate(BaseModel):
    """Body of PATCH /notes/{id}/progress. Range is checked by the service."""

    progress: int = Field(strict=True)


class NoteResponse(BaseModel):
    """Schema for a note in API responses (camelCase keys)."""

    id: str = Field(description="Note unique identifier")
    title: str
    content: str
    tags: list[str]
    attachments: list[Attachment]
    archived: bool
    pinned: bool
    mood: str
    progress: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("tags", "attachments", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> list:
        return list(value or [])

    @field_validator("mood", mode="before")
    @classmethod
    def _canonical_mood(cls, value: Any) -> Any:
        mood = Mood.parse(value)
        return mood.value if mood is not None else value
