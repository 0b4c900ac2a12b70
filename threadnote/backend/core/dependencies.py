"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.core.constants import ID_LENGTH
from threadnote.backend.core.database import get_db_session

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(request: Request) -> str:
    """
    Get the request ID for response metadata.

    Prefers the ID that RequestContextMiddleware bound and echoes in
    X-Request-ID, so the header and the envelope always agree.
    """
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id") or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]

# Path parameter for note identifiers; malformed ids fail with 422 before
# reaching the service layer.
NoteId = Annotated[
    str,
    Path(
        pattern=rf"^[A-Za-z0-9]{{{ID_LENGTH}}}$",
        description="Note identifier",
        examples=["aB3xY9"],
    ),
]
