"""
Custom application exceptions for structured error handling.
"""

from typing import Any, Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class StoreReadError(ApplicationException):
    """Raised when the session store cannot be queried."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            error_code="STORE_READ_ERROR",
        )


class StoreWriteError(ApplicationException):
    """Raised when a user upsert into the session store fails."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            error_code="STORE_WRITE_ERROR",
        )


class CatalogReadError(ApplicationException):
    """Raised when the room catalog cannot be read. Not recoverable per request."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=500,
            error_code="CATALOG_READ_ERROR",
        )
