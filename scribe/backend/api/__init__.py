"""
API Router.

Aggregates all endpoint routers.
"""

from fastapi import APIRouter

from scribe.backend.api import notes, tags

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
