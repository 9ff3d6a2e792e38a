"""
Typed errors raised by handlers and storage backends.

Handlers never build error responses themselves; every failure is raised as one
of these and turned into the uniform JSON body by the handler installed in
``main.create_app``.
"""
from __future__ import annotations

from typing import Any, List, Optional

from fastapi import status


class APIError(Exception):
    """Base class for errors that map to an HTTP error response."""

    kind = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message, "detail": self.detail}


class DecodeError(APIError):
    """Request body is not valid JSON or does not match the expected shape."""

    kind = "DecodeError"
    status_code = status.HTTP_400_BAD_REQUEST


class ParseError(APIError):
    """Path parameter could not be parsed."""

    kind = "ParseError"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(APIError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"todo {todo_id} not found")
        self.todo_id = todo_id


class StorageError(APIError):
    """Opaque backend failure."""

    kind = "StorageError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
