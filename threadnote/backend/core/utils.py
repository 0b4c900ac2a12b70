"""
Core Utilities.

Shared utility functions used across the backend.
"""

from datetime import datetime, timezone

import structlog


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def current_request_id(default: str = "internal") -> str:
    """Return the request ID bound to structlog context, if any."""
    return structlog.contextvars.get_contextvars().get("request_id", default)
