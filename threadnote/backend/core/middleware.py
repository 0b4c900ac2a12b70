"""
Request Context Middleware.

Binds a request ID and frontend identifier to every request so that all
log records emitted while a note operation runs can be correlated, and
reports request timing back to the caller.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from threadnote.backend.core.logging import get_logger

logger = get_logger(__name__)

KNOWN_FRONTENDS = {"web", "cli", "mobile", "api", "internal"}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided)
    - X-Frontend-ID: Frontend source identifier
    - X-Response-Time: Response duration in milliseconds

    Access in endpoints:
        request.state.request_id
        request.state.frontend
    """

    def __init__(self, app, log_requests: bool = True) -> None:
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        frontend = request.headers.get("X-Frontend-ID", "unknown").lower()
        if frontend not in KNOWN_FRONTENDS:
            frontend = "unknown"

        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
            source="web",
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": _elapsed_ms(started),
                    "error_type": type(exc).__name__,
                },
            )
            raise
        finally:
            duration_ms = _elapsed_ms(started)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        if self.log_requests:
            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )

        structlog.contextvars.clear_contextvars()
        return response


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
