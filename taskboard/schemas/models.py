"""Business models: task status enum, request payloads and read models.

Payload models validate what callers send; read models describe what the
service hands back. Database entities live in ``schemas.database``.
"""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
)
from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel
from sqlmodel import Field as SQLField

from ..errors import ValidationError

# ============================================================================
# ENUMS
# ============================================================================


class TaskStatus(StrEnum):
    """Task completion status, stored as its string value."""

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        """All valid status values in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def try_parse(cls, token: Any) -> "TaskStatus | None":
        """Parse a status token, returning None when it is not a member."""
        if not isinstance(token, str):
            return None
        try:
            return cls(token)
        except ValueError:
            return None

    @classmethod
    def parse(cls, token: Any) -> "TaskStatus":
        """Parse a status token or raise a 400 ValidationError."""
        status = cls.try_parse(token)
        if status is None:
            raise ValidationError("Invalid status", status_code=400)
        return status


# ============================================================================
# CONFIGURATION
# ============================================================================


class UnifiedConfig:
    """Shared ConfigDict presets for the business models."""

    PAYLOAD_CONFIG = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        use_enum_values=False,
    )

    READ_CONFIG = ConfigDict(
        from_attributes=True,
        frozen=True,
    )


# ============================================================================
# BASE MODELS
# ============================================================================


class BasePayloadModel(BaseModel):
    """Base for caller supplied payloads. Unknown keys are dropped."""

    model_config = UnifiedConfig.PAYLOAD_CONFIG


class BaseReadModel(BaseModel):
    """Base for models returned to callers."""

    model_config = UnifiedConfig.READ_CONFIG


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timestamp column stored as naive UTC and read back as aware UTC.

    Naive values written to it are taken to be UTC already.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class BaseEntityModel(SQLModel):
    """Base for database entity models with automatic timestamps."""

    created_at: datetime = SQLField(
        default_factory=utc_now, sa_type=UTCDateTime, index=True
    )
    updated_at: datetime = SQLField(default_factory=utc_now, sa_type=UTCDateTime)


# ============================================================================
# PAYLOADS
# ============================================================================


class TaskCreate(BasePayloadModel):
    """Fields accepted when creating a task.

    ``status`` and ``user_id`` are not accepted here; the service sets both.
    """

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=5000)


class TaskUpdate(BasePayloadModel):
    """Partial update payload. Omitted or null fields are left untouched."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    status: TaskStatus | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually provided."""
        return self.model_dump(exclude_none=True)


# ============================================================================
# READ MODELS
# ============================================================================


class Requester(BaseReadModel):
    """The authenticated user making the current request."""

    id: int
    name: str | None = None


class TaskRead(BaseReadModel):
    """Serialized representation of a task."""

    id: int
    title: str
    description: str
    status: TaskStatus
    user_id: int
    created_at: datetime
    updated_at: datetime


class TaskPage(BaseReadModel):
    """One page of tasks, newest first."""

    items: list[TaskRead] = Field(default_factory=list)
    page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    total: int = Field(ge=0)

    @computed_field
    @property
    def last_page(self) -> int:
        if self.total == 0:
            return 1
        return -(-self.total // self.per_page)

    @computed_field
    @property
    def has_more(self) -> bool:
        return self.page < self.last_page

    @property
    def ids(self) -> list[int]:
        return [task.id for task in self.items]


__all__ = [
    "BaseEntityModel",
    "BasePayloadModel",
    "BaseReadModel",
    "Requester",
    "TaskCreate",
    "TaskPage",
    "TaskRead",
    "TaskStatus",
    "TaskUpdate",
    "UnifiedConfig",
]
