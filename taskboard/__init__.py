"""Per-user to-do list backend.

Quick usage:
    from taskboard import TaskService, TaskStatus
    service = TaskService()
    page = service.filter(requester, "pending")
"""

from .errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    TaskboardError,
    ValidationError,
)
from .schemas import Requester, TaskPage, TaskRead, TaskStatus
from .services import TaskService


__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "Requester",
    "TaskPage",
    "TaskRead",
    "TaskService",
    "TaskStatus",
    "TaskboardError",
    "ValidationError",
]
