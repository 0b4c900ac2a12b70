"""
Event Publishers.

Search-index notifications. The search index is derived from note
content and is best-effort: a failed publish is logged and dropped, it
never fails the note operation that triggered it.

Publishers check the events_publish_enabled feature flag before publishing.
When disabled, events are silently skipped.

Usage:
    from threadnote.backend.events.publishers import NoteEventPublisher

    publisher = NoteEventPublisher()
    await publisher.note_indexed(note.id, note.content)
"""

from threadnote.backend.core.logging import get_logger
from threadnote.backend.core.utils import current_request_id
from threadnote.backend.events.schemas import EventEnvelope, NoteIndexed, NoteRemoved

logger = get_logger(__name__)


class NoteEventPublisher:
    """Publishes note search-index events to Redis Streams."""

    async def note_indexed(
        self, note_id: str, content: str, correlation_id: str | None = None,
    ) -> None:
        """Publish a notes.note.indexed event."""
        from threadnote.backend.core.config import get_app_config

        events = get_app_config().events
        await self._publish(
            events.streams.note_indexed,
            NoteIndexed(
                source=events.source,
                correlation_id=correlation_id or current_request_id(),
                payload={"note_id": note_id, "content": content},
            ),
        )

    async def notes_removed(
        self, note_ids: list[str], correlation_id: str | None = None,
    ) -> None:
        """Publish a notes.note.removed event for a whole deleted subtree."""
        from threadnote.backend.core.config import get_app_config

        events = get_app_config().events
        await self._publish(
            events.streams.note_removed,
            NoteRemoved(
                source=events.source,
                correlation_id=correlation_id or current_request_id(),
                payload={"note_ids": note_ids},
            ),
        )

    async def _publish(self, stream: str, event: EventEnvelope) -> None:
        """Publish an event if the feature flag is enabled. Never raises."""
        from threadnote.backend.core.config import get_app_config

        app_config = get_app_config()
        if not app_config.features.events_publish_enabled:
            return

        try:
            from threadnote.backend.events.broker import get_event_broker

            broker = get_event_broker()
            await broker.publish(
                event.model_dump(),
                stream=stream,
                maxlen=app_config.events.streams.default_maxlen,
            )
        except Exception as e:
            logger.warning(
                "Search index notification dropped",
                extra={"stream": stream, "event_id": event.event_id, "error": str(e)},
            )
            return

        logger.debug(
            "Event published",
            extra={"stream": stream, "event_type": event.event_type, "event_id": event.event_id},
        )
