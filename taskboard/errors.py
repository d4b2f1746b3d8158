"""Domain errors raised by the task service.

Each error carries the HTTP-equivalent status code the adapters surface to
the caller. All of them are request local.
"""

from typing import Any


class TaskboardError(Exception):
    """Base class for all taskboard errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(TaskboardError):
    """Malformed or missing fields, or an unparseable status token."""

    status_code = 422

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, status_code)
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


class AuthenticationError(TaskboardError):
    """No authenticated caller could be resolved."""

    status_code = 401


class AuthorizationError(TaskboardError):
    """Authenticated caller is not the owner of the resource."""

    status_code = 403


class NotFoundError(TaskboardError):
    """Referenced resource does not exist."""

    status_code = 404


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "TaskboardError",
    "ValidationError",
]
