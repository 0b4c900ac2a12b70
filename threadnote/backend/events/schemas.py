"""
Event Schemas.

Standardized event envelope and the search-index notifications emitted
by the note service.

Naming convention for event_type: domain.entity.action (dot notation)
Stream naming convention: {domain}:{event-type} (colon-separated)
"""

from uuid import uuid4

from pydantic import BaseModel, Field

from threadnote.backend.core.utils import utc_now


class EventEnvelope(BaseModel):
    """Base event envelope shared by all events.

    Fields:
        event_id: Unique event identifier (auto-generated UUID)
        event_type: Domain event type in dot notation
        event_version: Schema version for forward compatibility
        timestamp: ISO 8601 UTC timestamp
        source: Service/module that published the event
        correlation_id: Request ID for tracing across services
        payload: Event-specific data
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    event_version: int = 1
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    source: str
    correlation_id: str
    payload: dict


class NoteIndexed(EventEnvelope):
    """Published after a note is created or its content changes."""

    event_type: str = "notes.note.indexed"


class NoteRemoved(EventEnvelope):
    """Published after a cascade delete, listing every removed note."""

    event_type: str = "notes.note.removed"
