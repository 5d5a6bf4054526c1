"""
Tags API Endpoint.
"""

from fastapi import APIRouter

from scribe.backend.core.dependencies import NoteServiceDep

router = APIRouter()


@router.get(
    "",
    response_model=list[str],
    summary="List tags",
    description="Distinct tags across all notes, sorted ascending.",
)
async def list_tags(service: NoteServiceDep) -> list[str]:
    return await service.list_tags()
