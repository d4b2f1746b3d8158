"""Service layer for taskboard business operations."""

from .task_service import ALL_STATUSES, TaskService


__all__ = ["ALL_STATUSES", "TaskService"]
