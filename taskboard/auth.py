"""Ownership checks gating access to tasks."""

import logging

from .errors import AuthorizationError
from .schemas.database import Task
from .schemas.models import Requester


logger = logging.getLogger(__name__)


def is_owner(requester_id: int, owner_id: int) -> bool:
    """Return True when the requester is the recorded owner."""
    return requester_id == owner_id


def authorize_owner(requester: Requester, task: Task) -> None:
    """Raise AuthorizationError unless ``requester`` owns ``task``."""
    if not is_owner(requester.id, task.user_id):
        logger.warning(
            f"User {requester.id} refused access to task {task.id} "
            f"owned by user {task.user_id}"
        )
        raise AuthorizationError("This action is unauthorized.")
