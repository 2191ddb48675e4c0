"""Request/response models for planner endpoints."""

from typing import List

from pydantic import BaseModel, Field

from blockplanner.engine.timezones import HourLabelRow
from blockplanner.models.work_block import WorkBlock


class BlockResponse(BaseModel):
    """Response wrapping a single block."""
    block: WorkBlock


class BlockListResponse(BaseModel):
    """Response for a week query."""
    blocks: List[WorkBlock]
    count: int


class TimeLabelsResponse(BaseModel):
    """Gutter labels for the configured time zones."""
    timezones: List[str] = Field(default_factory=list, description="Zone labels in column order")
    rows: List[HourLabelRow]
