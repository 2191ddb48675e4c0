"""SQLAlchemy database models for blockplanner."""

from datetime import datetime, timezone
from typing import Optional, Type, TypeVar, Union
import uuid
from sqlalchemy import Column, String, DateTime, Index

from blockplanner.database.database import Base
from blockplanner.models.work_block import Importance, WorkBlockStatus, WorkBlockType

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T, None]) -> Optional[str]:
    """Convert enum to string value (handles both enum and string)."""
    if enum_obj is None:
        return None
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: Optional[str], enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Normalize to naive UTC for storage. Naive input is taken to be UTC already."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    return dt.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class WorkBlockDB(Base):
    """Database model for WorkBlock. Timestamps are stored as naive UTC."""

    __tablename__ = "work_blocks"
    __table_args__ = (
        Index("ix_work_blocks_range", "start_at", "end_at"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Time range
    start_at = Column(DateTime, nullable=False, index=True)
    end_at = Column(DateTime, nullable=False)

    # Classification
    type = Column(String, nullable=False, default=WorkBlockType.PLANNED.value)
    status = Column(String, nullable=False, default=WorkBlockStatus.PLANNED.value, index=True)
    importance = Column(String, nullable=True)
    color = Column(String, nullable=True)

    # Descriptive
    title = Column(String, nullable=False, default="")
    notes = Column(String, nullable=True)
    location = Column(String, nullable=True)

    # Opaque associations
    project_id = Column(String, nullable=True, index=True)
    task_id = Column(String, nullable=True, index=True)
    user_id = Column(String, nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from blockplanner.models.work_block import WorkBlock

        importance = value_to_enum(self.importance, Importance, None)
        return WorkBlock(
            id=self.id,
            start_at=from_utc_naive(self.start_at),
            end_at=from_utc_naive(self.end_at),
            type=value_to_enum(self.type, WorkBlockType, WorkBlockType.PLANNED),
            status=value_to_enum(self.status, WorkBlockStatus, WorkBlockStatus.PLANNED),
            importance=importance,
            color=self.color,
            title=self.title or "",
            notes=self.notes,
            location=self.location,
            project_id=self.project_id,
            task_id=self.task_id,
            user_id=self.user_id,
            created_at=from_utc_naive(self.created_at),
            updated_at=from_utc_naive(self.updated_at),
        )

    @classmethod
    def from_create(cls, data, block_id: Optional[str] = None) -> "WorkBlockDB":
        """Build a row from a WorkBlockCreate (or a WorkBlock)."""
        return cls(
            id=block_id or str(uuid.uuid4()),
            start_at=to_utc_naive(data.start_at),
            end_at=to_utc_naive(data.end_at),
            type=enum_to_value(data.type),
            status=enum_to_value(data.status),
            importance=enum_to_value(data.importance),
            color=data.color,
            title=data.title,
            notes=data.notes or None,
            location=data.location or None,
            project_id=data.project_id,
            task_id=data.task_id,
            user_id=data.user_id,
        )
