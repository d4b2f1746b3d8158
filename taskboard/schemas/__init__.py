"""Schema package for the taskboard service.

Quick usage:
    from taskboard.schemas import TaskStatus, TaskCreate, Task
    from taskboard.repositories import TaskRepository
    from taskboard.services import TaskService
"""

# Database entities
from .database import Task, User

# Business models and enums
from .models import (
    BaseEntityModel,
    BasePayloadModel,
    BaseReadModel,
    Requester,
    TaskCreate,
    TaskPage,
    TaskRead,
    TaskStatus,
    TaskUpdate,
    UnifiedConfig,
)


__all__ = [
    "BaseEntityModel",
    "BasePayloadModel",
    "BaseReadModel",
    "Requester",
    "Task",
    "TaskCreate",
    "TaskPage",
    "TaskRead",
    "TaskStatus",
    "TaskUpdate",
    "UnifiedConfig",
    "User",
]
