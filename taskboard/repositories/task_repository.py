"""Task and user repositories.

Query helpers for per-user task listings with status filtering and
offset pagination, plus the minimal user lookups the service needs.
"""

from sqlalchemy import func
from sqlmodel import select

from ..schemas.database import Task, User
from ..schemas.models import TaskStatus
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for task operations scoped by owning user."""

    def get_entity_class(self) -> type[Task]:
        """Return the database entity class for this repository."""
        return Task

    def _user_scope(self, statement, user_id: int, status: TaskStatus | None):
        statement = statement.where(Task.user_id == user_id)
        if status is not None:
            statement = statement.where(Task.status == status)
        return statement

    def count_for_user(self, user_id: int, status: TaskStatus | None = None) -> int:
        """Count a user's tasks, optionally restricted to one status."""
        statement = self._user_scope(
            select(func.count()).select_from(Task), user_id, status
        )
        return self.session.exec(statement).one()

    def paginate_for_user(
        self,
        user_id: int,
        page: int,
        per_page: int,
        status: TaskStatus | None = None,
    ) -> tuple[list[Task], int]:
        """Get one page of a user's tasks, newest first.

        Ties on ``created_at`` are broken by descending id so that pages
        never overlap.

        Returns:
            Tuple of (tasks on the page, total matching tasks)

        """
        total = self.count_for_user(user_id, status)
        statement = (
            self._user_scope(select(Task), user_id, status)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        return list(self.session.exec(statement).all()), total


class UserRepository(BaseRepository[User]):
    """Repository for the users owning tasks."""

    def get_entity_class(self) -> type[User]:
        return User

    def create_user(self, name: str, email: str) -> User:
        return self.create(name=name, email=email)

    def get_by_email(self, email: str) -> User | None:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()
