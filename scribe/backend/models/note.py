"""
Note Model.

Database model for notes. Tags live in an ordered child table so that
tag-superset filters and the distinct tag listing are plain SQL.
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scribe.backend.domain.enums import DEFAULT_MOOD, DEFAULT_PROGRESS
from scribe.backend.models.base import Base, TimestampMixin, UUIDMixin


class NoteTag(Base):
    """One tag of a note, kept in display order."""

    __tablename__ = "note_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    note_id: Mapped[str] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tag: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, tag={self.tag!r})>"


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Content is rich-text markup. Mood is stored as a plain string so that
    records written with retired mood names still load.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        index=True,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
        index=True,
    )
    pinned: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    mood: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_MOOD.value,
        nullable=False,
    )
    progress: Mapped[int] = mapped_column(
        Integer,
        default=DEFAULT_PROGRESS,
        nullable=False,
    )
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    tag_links: Mapped[list[NoteTag]] = relationship(
        order_by=NoteTag.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    tags: AssociationProxy[list[str]] = association_proxy(
        "tag_links",
        "tag",
        creator=lambda tag: NoteTag(tag=tag),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
