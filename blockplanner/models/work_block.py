"""WorkBlock data model for blockplanner."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class WorkBlockType(str, Enum):
    """Block type enumeration (color only, never scheduling logic)."""
    PLANNED = "planned"
    MEETING = "meeting"
    FOCUS = "focus"
    ADMIN = "admin"
    BREAK = "break"


class WorkBlockStatus(str, Enum):
    """Block status enumeration."""
    PLANNED = "planned"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Importance(str, Enum):
    """Importance tag used by the capacity view."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _check_range(start_at: Optional[datetime], end_at: Optional[datetime]) -> None:
    if start_at is not None and end_at is not None and end_at <= start_at:
        raise ValueError("end_at must be after start_at")


class WorkBlock(BaseModel):
    """WorkBlock represents something placed on the week grid."""

    id: Optional[str] = Field(None, description="Server-assigned identifier (absent before creation)")
    start_at: datetime = Field(..., description="Block start (absolute instant)")
    end_at: datetime = Field(..., description="Block end (absolute instant)")
    type: WorkBlockType = Field(WorkBlockType.PLANNED, description="Block type")
    status: WorkBlockStatus = Field(WorkBlockStatus.PLANNED, description="Block status")
    importance: Optional[Importance] = Field(None, description="Optional importance tag")
    color: Optional[str] = Field(None, description="Custom color overriding the type color")
    title: str = Field("", description="Block title")
    notes: Optional[str] = Field(None, description="Free-form notes")
    location: Optional[str] = Field(None, description="Location or description")
    project_id: Optional[str] = Field(None, description="Associated project ID")
    task_id: Optional[str] = Field(None, description="Associated task ID")
    user_id: Optional[str] = Field(None, description="Owner user ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (store-maintained)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (store-maintained)")

    @model_validator(mode="after")
    def _end_after_start(self):
        _check_range(self.start_at, self.end_at)
        return self


class WorkBlockCreate(BaseModel):
    """Input for creating a block (a WorkBlock without id)."""

    title: str = Field(..., min_length=1, description="Block title")
    start_at: datetime
    end_at: datetime
    type: WorkBlockType = WorkBlockType.PLANNED
    status: WorkBlockStatus = WorkBlockStatus.PLANNED
    importance: Optional[Importance] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    user_id: Optional[str] = None

    @model_validator(mode="after")
    def _end_after_start(self):
        _check_range(self.start_at, self.end_at)
        return self


class WorkBlockUpdate(BaseModel):
    """Partial update. Only fields explicitly set are written."""

    title: Optional[str] = Field(None, min_length=1)
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    type: Optional[WorkBlockType] = None
    status: Optional[WorkBlockStatus] = None
    importance: Optional[Importance] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    user_id: Optional[str] = None

    @model_validator(mode="after")
    def _end_after_start(self):
        _check_range(self.start_at, self.end_at)
        return self


class TimeRangePatch(BaseModel):
    """The engine's only mutation output: a new time range for an existing block."""

    start_at: datetime
    end_at: datetime


class BlockFilters(BaseModel):
    """Optional filters for a week query."""

    user_id: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    status: Optional[WorkBlockStatus] = None
