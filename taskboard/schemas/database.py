"""SQLModel database entity models.

Table definitions for users and their tasks, with conversion helpers into
the read models from ``schemas.models``.
"""

from typing import Optional

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index
from sqlmodel import Field, Relationship

from .models import BaseEntityModel, Requester, TaskRead, TaskStatus


class User(BaseEntityModel, table=True):
    """Owner of tasks. Authentication happens outside this service."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)

    tasks: list["Task"] = Relationship(back_populates="user")

    def to_requester(self) -> Requester:
        return Requester(id=self.id, name=self.name)


class Task(BaseEntityModel, table=True):
    """SQLModel task table."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_id_created_at", "user_id", "created_at"),
        Index("ix_tasks_user_id_status", "user_id", "status"),
    )

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    status: TaskStatus = Field(
        default=TaskStatus.PENDING,
        sa_type=SAEnum(
            TaskStatus,
            name="task_status",
            native_enum=False,
            length=20,
            values_callable=lambda enum_class: enum_class.values(),
        ),
        nullable=False,
    )
    user_id: int = Field(foreign_key="users.id", nullable=False)

    user: Optional[User] = Relationship(back_populates="tasks")

    def to_read_model(self) -> TaskRead:
        """Convert to the TaskRead model returned to callers."""
        return TaskRead.model_validate(self)


__all__ = ["Task", "User"]
