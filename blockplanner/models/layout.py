"""Derived layout records for blockplanner.

Everything here is recomputed on every layout pass and never persisted.
"""

from datetime import date, datetime
from typing import Dict, List
from pydantic import BaseModel, Field

from blockplanner.models.work_block import WorkBlock


class WeekRange(BaseModel):
    """Monday 00:00 through Sunday 23:59:59.999 of one week."""

    start: datetime
    end: datetime


class LaneRecord(BaseModel):
    """A block together with its lane and the lane count of its day."""

    block: WorkBlock
    lane: int = Field(..., ge=0)
    total_lanes: int = Field(..., ge=1)


class BlockPlacement(BaseModel):
    """Render record for one block inside its day column."""

    block: WorkBlock
    lane: int = Field(..., ge=0)
    total_lanes: int = Field(..., ge=1)
    top: float = Field(..., description="Offset from the top of the grid body, in pixels")
    height: float = Field(..., description="Rendered height, floored at the minimum block height")
    left_pct: float = Field(..., description="Left edge as a percentage of the column width")
    width_pct: float = Field(..., description="Width as a percentage of the column width")
    left: float = Field(..., description="Left edge in pixels, relative to the column")
    width: float = Field(..., description="Width in pixels")


class DayLayout(BaseModel):
    """All placements for one calendar day."""

    day: date
    day_index: int = Field(..., ge=0, le=6)
    x: float = Field(..., description="Absolute x of the column's left edge")
    total_lanes: int = Field(0, ge=0)
    placements: List[BlockPlacement] = Field(default_factory=list)


class WeekLayout(BaseModel):
    """Seven DayLayouts, Monday first."""

    week: WeekRange
    days: List[DayLayout]

    def placements_by_id(self) -> Dict[str, BlockPlacement]:
        """Index placements by block id (blocks without an id are skipped)."""
        return {
            p.block.id: p
            for d in self.days
            for p in d.placements
            if p.block.id is not None
        }
