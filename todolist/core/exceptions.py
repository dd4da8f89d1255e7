"""Custom exception classes for the application."""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(APIError):
    """Raised when a resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, status_code=404, details=details)


class ListNotFoundError(NotFoundError):
    """Raised when an operation targets a list that does not exist."""

    def __init__(self, list_name: str) -> None:
        self.list_name = list_name
        super().__init__(message="List not found", details={"list": list_name})
