"""Planner engine for blockplanner."""

from blockplanner.engine.geometry import TimeGeometry, snap_minutes
from blockplanner.engine.week_range import week_range, week_days
from blockplanner.engine.lanes import assign_lanes, max_concurrency
from blockplanner.engine.layout import GridLayoutEngine, group_blocks_by_day
from blockplanner.engine.interaction import PointerInteractionController, PointerHost, NullPointerHost
from blockplanner.engine.store import BlockStore
from blockplanner.engine.capacity import summarize_capacity, CapacitySummary

__all__ = [
    "TimeGeometry",
    "snap_minutes",
    "week_range",
    "week_days",
    "assign_lanes",
    "max_concurrency",
    "GridLayoutEngine",
    "group_blocks_by_day",
    "PointerInteractionController",
    "PointerHost",
    "NullPointerHost",
    "BlockStore",
    "summarize_capacity",
    "CapacitySummary",
]
