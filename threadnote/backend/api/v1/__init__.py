"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from threadnote.backend.api.v1.endpoints import notes, search

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(search.router, prefix="/search", tags=["search"])
