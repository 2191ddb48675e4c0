"""Data models for blockplanner."""

from blockplanner.models.work_block import (
    WorkBlock,
    WorkBlockCreate,
    WorkBlockUpdate,
    WorkBlockType,
    WorkBlockStatus,
    Importance,
    TimeRangePatch,
    BlockFilters,
)
from blockplanner.models.grid import GridConfig, TimeZoneLabel
from blockplanner.models.layout import WeekRange, LaneRecord, BlockPlacement, DayLayout, WeekLayout

__all__ = [
    "WorkBlock",
    "WorkBlockCreate",
    "WorkBlockUpdate",
    "WorkBlockType",
    "WorkBlockStatus",
    "Importance",
    "TimeRangePatch",
    "BlockFilters",
    "GridConfig",
    "TimeZoneLabel",
    "WeekRange",
    "LaneRecord",
    "BlockPlacement",
    "DayLayout",
    "WeekLayout",
]
