"""
Notes API Endpoints.

REST API endpoints for notes, threads and mentions.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from threadnote.backend.core.dependencies import DbSession, NoteId, RequestId
from threadnote.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from threadnote.backend.schemas.base import ApiResponse, ResponseMetadata
from threadnote.backend.schemas.note import (
    MentionResponse,
    NoteCreate,
    NoteDetailResponse,
    NoteResponse,
    NoteUpdate,
)
from threadnote.backend.services.note import NoteService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a root note, or a reply when parent_id is given.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    summary="List thread roots (paginated)",
    description="Get root notes, newest first, with total count and pagination info.",
)
async def list_notes(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    """List root notes."""
    service = NoteService(db)
    notes, total = await service.list_root_notes(
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=notes,
        item_schema=NoteResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteDetailResponse],
    summary="Get a note",
    description="Get a note by ID, with its full thread unless include_thread=false.",
)
async def get_note(
    note_id: NoteId,
    db: DbSession,
    request_id: RequestId,
    include_thread: bool = Query(default=True, description="Include the full thread"),
) -> ApiResponse[NoteDetailResponse]:
    """Get a note and, optionally, its thread."""
    service = NoteService(db)
    note = await service.get_note(note_id)

    thread = None
    if include_thread:
        thread = [NoteResponse.model_validate(n) for n in await service.get_thread(note_id)]

    return ApiResponse(
        data=NoteDetailResponse(note=NoteResponse.model_validate(note), thread=thread),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}/thread",
    response_model=ApiResponse[list[NoteResponse]],
    summary="Get a thread",
    description="Get the whole thread containing a note: root first, then replies in posting order.",
)
async def get_thread(
    note_id: NoteId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """Get the ordered thread of a note."""
    service = NoteService(db)
    thread = await service.get_thread(note_id)
    return ApiResponse(
        data=[NoteResponse.model_validate(n) for n in thread],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}/mentions",
    response_model=ApiResponse[list[MentionResponse]],
    summary="Get mentions of a note",
    description="Get every note that mentions this note, with the mention position.",
)
async def get_mentions(
    note_id: NoteId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[MentionResponse]]:
    """Get notes mentioning a note."""
    service = NoteService(db)
    mentions = await service.get_mentions(note_id)
    return ApiResponse(
        data=[
            MentionResponse(note=NoteResponse.model_validate(note), position=position)
            for note, position in mentions
        ],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Replace a note's content and re-index its mentions.",
)
async def update_note(
    note_id: NoteId,
    data: NoteUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note, all of its replies, and every mention touching them.",
)
async def delete_note(
    note_id: NoteId,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a note and its subtree."""
    service = NoteService(db)
    await service.delete_note(note_id)
