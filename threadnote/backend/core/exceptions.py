"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict | None = None,
        code: str = "VAL_VALIDATION_ERROR",
    ) -> None:
        self.details = details or {}
        super().__init__(message, code=code)


class CircularReferenceError(ApplicationError):
    """Raised when a proposed mention set would close a cycle in the mention graph."""

    def __init__(
        self,
        message: str = "Circular reference detected in mentions",
        details: dict | None = None,
    ) -> None:
        self.details = details or {}
        super().__init__(message, code="RES_CIRCULAR_REFERENCE")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
