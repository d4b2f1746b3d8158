"""Base repository pattern with common operations.

Provides the foundation for all repository implementations with
standardized CRUD operations and query patterns.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlmodel import Session, SQLModel

from ..schemas.models import utc_now


EntityT = TypeVar("EntityT", bound=SQLModel)


class BaseRepository(Generic[EntityT], ABC):
    """Base repository with common operations.

    Repositories flush but never commit; the service owning the session
    decides when a unit of work is complete.
    """

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def get_entity_class(self) -> type[EntityT]:
        """Return the SQLModel entity class."""

    def create(self, **fields: Any) -> EntityT:
        """Create and flush a new entity so its primary key is assigned."""
        entity = self.get_entity_class()(**fields)
        self.session.add(entity)
        self.session.flush()
        self.session.refresh(entity)
        return entity

    def get_by_id(self, entity_id: int) -> EntityT | None:
        """Get entity by ID."""
        return self.session.get(self.get_entity_class(), entity_id)

    def update(self, entity: EntityT, updates: dict[str, Any]) -> EntityT:
        """Apply field updates to an entity and bump its timestamp."""
        for key, value in updates.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        self.session.flush()
        self.session.refresh(entity)
        return entity

    def delete(self, entity: EntityT) -> None:
        """Hard delete an entity."""
        self.session.delete(entity)
        self.session.flush()
