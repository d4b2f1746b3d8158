"""Task resource service.

High-level task operations for an authenticated requester: validation,
ownership checks, pagination and transaction handling over the task
repository.
"""

import logging
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from ..auth import authorize_owner
from ..config import TaskboardSettings, get_settings
from ..database import get_sync_session
from ..errors import AuthorizationError, NotFoundError, ValidationError
from ..repositories import TaskRepository
from ..schemas.database import Task
from ..schemas.models import (
    Requester,
    TaskCreate,
    TaskPage,
    TaskRead,
    TaskStatus,
    TaskUpdate,
)


logger = logging.getLogger(__name__)

ALL_STATUSES = "all"

Payload = Mapping[str, Any] | BaseModel


class TaskService:
    """Per-user task operations.

    Every operation takes the requester explicitly. Mutations are
    committed as a single unit and rolled back on any error.
    """

    def __init__(
        self,
        session: Session | None = None,
        settings: TaskboardSettings | None = None,
    ):
        """Initialize task service with database session.

        Args:
            session: SQLModel session. If None, creates default sync session.
            settings: Settings instance. If None, uses the cached global one.

        """
        if session is None:
            session = get_sync_session()

        self.session = session
        self.settings = settings or get_settings()
        self.task_repo = TaskRepository(session)

    @property
    def per_page(self) -> int:
        return self.settings.pagination.per_page

    @contextmanager
    def _unit_of_work(self) -> Generator[None, None, None]:
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    @staticmethod
    def _validate(model_class: type[BaseModel], payload: Payload) -> Any:
        if isinstance(payload, model_class):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        try:
            return model_class.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                "The given data was invalid.",
                errors=e.errors(
                    include_url=False, include_context=False, include_input=False
                ),
            ) from e

    @staticmethod
    def _check_page(page: int) -> None:
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError(f"Page must be a positive integer, got {page!r}")

    def _get_or_404(self, task_id: int) -> Task:
        task = self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def _page(
        self, requester: Requester, page: int, status: TaskStatus | None
    ) -> TaskPage:
        self._check_page(page)
        tasks, total = self.task_repo.paginate_for_user(
            requester.id, page=page, per_page=self.per_page, status=status
        )
        return TaskPage(
            items=[task.to_read_model() for task in tasks],
            page=page,
            per_page=self.per_page,
            total=total,
        )

    def list(self, requester: Requester, page: int = 1) -> TaskPage:
        """Return the requester's tasks, newest first, one page at a time."""
        return self._page(requester, page, status=None)

    def filter(self, requester: Requester, status_token: str, page: int = 1) -> TaskPage:
        """Return the requester's tasks with the given status.

        ``"all"`` applies no status constraint. Any other token must be a
        TaskStatus value; otherwise a 400 ValidationError is raised before
        any query runs.
        """
        if status_token == ALL_STATUSES:
            return self.list(requester, page)

        try:
            status = TaskStatus.parse(status_token)
        except ValidationError:
            logger.warning(f"Rejected task filter with invalid status {status_token!r}")
            raise

        return self._page(requester, page, status=status)

    def create(self, requester: Requester, payload: Payload) -> TaskRead:
        """Create a pending task owned by the requester."""
        data: TaskCreate = self._validate(TaskCreate, payload)

        with self._unit_of_work():
            task = self.task_repo.create(
                title=data.title,
                description=data.description,
                status=TaskStatus.PENDING,
                user_id=requester.id,
            )
        logger.info(f"User {requester.id} created task {task.id}")
        return task.to_read_model()

    def show(self, task_id: int, requester: Requester | None = None) -> TaskRead:
        """Return a task by id.

        Ownership is only checked when ``security.enforce_read_ownership``
        is enabled, in which case ``requester`` is required.
        """
        task = self._get_or_404(task_id)
        if self.settings.security.enforce_read_ownership:
            if requester is None:
                logger.warning(f"Anonymous read of task {task.id} refused")
                raise AuthorizationError("This action is unauthorized.")
            authorize_owner(requester, task)
        return task.to_read_model()

    def update(self, requester: Requester, task_id: int, payload: Payload) -> TaskRead:
        """Apply a partial update to a task the requester owns."""
        task = self._get_or_404(task_id)
        authorize_owner(requester, task)
        data: TaskUpdate = self._validate(TaskUpdate, payload)
        changes = data.changes()

        with self._unit_of_work():
            task = self.task_repo.update(task, changes)
        logger.info(
            f"User {requester.id} updated task {task.id}: {sorted(changes) or 'no changes'}"
        )
        return task.to_read_model()

    def destroy(self, requester: Requester, task_id: int) -> None:
        """Permanently delete a task the requester owns."""
        task = self._get_or_404(task_id)
        authorize_owner(requester, task)

        with self._unit_of_work():
            self.task_repo.delete(task)
        logger.info(f"User {requester.id} deleted task {task_id}")

    def close(self):
        """Close the database session."""
        if self.session:
            self.session.close()
