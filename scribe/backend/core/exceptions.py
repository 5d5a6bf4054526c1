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
    """Raised when a well-formed identifier matches no record."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when an entity fails a data-integrity rule."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class InvalidIdError(ApplicationError):
    """Raised when an identifier is not structurally valid for the storage backend."""

    def __init__(self, message: str = "Invalid ID") -> None:
        super().__init__(message, code="VAL_INVALID_ID")


class InvalidArgumentError(ApplicationError):
    """Raised when a value is outside its allowed set."""

    def __init__(self, message: str = "Invalid argument") -> None:
        super().__init__(message, code="VAL_INVALID_ARGUMENT")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
