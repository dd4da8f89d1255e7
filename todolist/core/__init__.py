"""Core utilities and middleware."""

from todolist.core.exceptions import APIError, ListNotFoundError, NotFoundError
from todolist.core.middleware import correlation_id_var

__all__ = [
    "APIError",
    "ListNotFoundError",
    "NotFoundError",
    "correlation_id_var",
]
