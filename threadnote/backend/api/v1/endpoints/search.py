"""
Search API Endpoints.

Content and mention search over notes.
"""

from typing import Literal

from fastapi import APIRouter, Query

from threadnote.backend.core.dependencies import DbSession, RequestId
from threadnote.backend.schemas.base import ApiResponse, ResponseMetadata
from threadnote.backend.schemas.note import NoteResponse
from threadnote.backend.services.search import SearchService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="Search notes",
    description="Search by content substring, or (type=mention) list the notes mentioning an ID.",
)
async def search_notes(
    db: DbSession,
    request_id: RequestId,
    q: str = Query(..., min_length=1, max_length=100, description="Search query or note ID"),
    type: Literal["content", "mention"] = Query(default="content", description="Search mode"),
    limit: int = Query(default=20, ge=1, le=100, description="Maximum number of results"),
) -> ApiResponse[list[NoteResponse]]:
    """Search notes."""
    service = SearchService(db)
    if type == "mention":
        notes = await service.search_by_mention(q, limit=limit)
    else:
        notes = await service.search_by_content(q, limit=limit)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )
