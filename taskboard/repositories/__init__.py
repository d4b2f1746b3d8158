"""Repository layer for taskboard persistence."""

from .base import BaseRepository
from .task_repository import TaskRepository, UserRepository


__all__ = ["BaseRepository", "TaskRepository", "UserRepository"]
