"""
Note Schemas.

Pydantic schemas for note API request/response validation.

Request schemas only check payload shape (types, id format). Content
length is enforced by NoteService so that the same rule applies to every
caller, and so an empty or oversized body reports VAL_CONTENT_EMPTY /
VAL_CONTENT_TOO_LONG instead of a generic request error.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from threadnote.backend.core.constants import ID_LENGTH

ID_REGEX = rf"^[A-Za-z0-9]{{{ID_LENGTH}}}$"


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    content: str = Field(
        ...,
        description="Note content; may reference other notes as @<id>",
        examples=["reply to @aB3xY9"],
    )
    parent_id: str | None = Field(
        default=None,
        pattern=ID_REGEX,
        description="Identifier of the root note this replies to",
        examples=["aB3xY9"],
    )


class NoteUpdate(BaseModel):
    """Schema for replacing a note's content."""

    content: str = Field(..., description="New note content")


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    content: str = Field(description="Note content")
    parent_id: str | None = Field(description="Parent note identifier, null for roots")
    depth: int = Field(description="0 for roots, 1 for replies")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last content edit timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteDetailResponse(BaseModel):
    """A note together with its full thread."""

    note: NoteResponse
    thread: list[NoteResponse] | None = None


class MentionResponse(BaseModel):
    """A note that mentions the requested note, with the mention offset."""

    note: NoteResponse
    position: int = Field(description="Character offset of the mention sigil")
