"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from fastapi import APIRouter, Query, Response

from scribe.backend.core.dependencies import NoteServiceDep
from scribe.backend.domain.query import build_filter
from scribe.backend.schemas.note import (
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    ProgressUpdate,
)

router = APIRouter()


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="List notes, pinned first then most recently updated.",
)
async def list_notes(
    service: NoteServiceDep,
    q: str | None = Query(default=None, description="Text to find in title or content"),
    tags: str | None = Query(default=None, description="Comma-separated tags, all required"),
    archived: str | None = Query(default=None, description="'true' or 'false'; omit for both"),
    mood: str | None = Query(default=None, description="Mood (retired names accepted)"),
) -> list[NoteResponse]:
    """List notes matching the filters."""
    notes = await service.list_notes(build_filter(q=q, tags=tags, archived=archived, mood=mood))
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
)
async def get_note(note_id: str, service: NoteServiceDep) -> NoteResponse:
    """Get a note by ID."""
    note = await service.get_note(note_id)
    return NoteResponse.model_validate(note)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a note. A blank title is derived from the content.",
)
async def create_note(data: NoteCreate, service: NoteServiceDep) -> NoteResponse:
    """Create a new note."""
    note = await service.create_note(data)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Merge the given fields into the note.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    service: NoteServiceDep,
) -> NoteResponse:
    """Update a note."""
    note = await service.update_note(note_id, data)
    return NoteResponse.model_validate(note)


@router.patch("/{note_id}/pin", response_model=NoteResponse, summary="Toggle pinned")
async def toggle_pin(note_id: str, service: NoteServiceDep) -> NoteResponse:
    note = await service.toggle_pin(note_id)
    return NoteResponse.model_validate(note)


@router.patch("/{note_id}/archive", response_model=NoteResponse, summary="Toggle archived")
async def toggle_archive(note_id: str, service: NoteServiceDep) -> NoteResponse:
    note = await service.toggle_archive(note_id)
    return NoteResponse.model_validate(note)


@router.patch("/{note_id}/progress", response_model=NoteResponse, summary="Set progress")
async def set_progress(
    note_id: str,
    data: ProgressUpdate,
    service: NoteServiceDep,
) -> NoteResponse:
    note = await service.set_progress(note_id, data.progress)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(note_id: str, service: NoteServiceDep) -> Response:
    """Delete a note."""
    await service.delete_note(note_id)
    return Response(status_code=204)
