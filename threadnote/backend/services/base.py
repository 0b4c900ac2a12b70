"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from threadnote.backend.services.base import BaseService

    class ThreadService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from threadnote.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations
    - Common validation patterns
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions. Nothing is retried here.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists") from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    async def _commit(self, operation: str) -> None:
        """
        Commit the current transaction.

        Side effects that must only follow durable writes (event
        publishing) go after this call. A failed commit surfaces as
        DatabaseError and the request's session rolls back.
        """
        await self._execute_db_operation(f"{operation}_commit", self.session.commit())

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Validate string length constraints.

        Error codes are derived from the field name, e.g. VAL_CONTENT_EMPTY,
        VAL_CONTENT_TOO_SHORT or VAL_CONTENT_TOO_LONG.

        Raises:
            ValidationError: If string length is out of bounds
        """
        prefix = f"VAL_{field_name.upper()}"
        bounds = {"min_length": min_length, "max_length": max_length, "actual": len(value)}

        if min_length is not None and len(value) < min_length:
            code = f"{prefix}_EMPTY" if not value else f"{prefix}_TOO_SHORT"
            raise ValidationError(
                f"{field_name} must be between {min_length} and {max_length} characters",
                details={field_name: bounds},
                code=code,
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} must be between {min_length} and {max_length} characters",
                details={field_name: bounds},
                code=f"{prefix}_TOO_LONG",
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information with service context."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
