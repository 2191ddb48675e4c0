"""Week grid layout.

Turns a flat block collection into per-day, lane-assigned placement records.
The result depends only on (blocks, reference date, config) and is recomputed
from scratch on every call.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, Iterable, List, Sequence, Union

from blockplanner.engine.geometry import TimeGeometry, clamp, to_local
from blockplanner.engine.lanes import assign_lanes
from blockplanner.engine.week_range import week_days, week_range
from blockplanner.models.grid import GridConfig
from blockplanner.models.layout import BlockPlacement, DayLayout, LaneRecord, WeekLayout
from blockplanner.models.work_block import WorkBlock


def local_day(block: WorkBlock, tz: tzinfo) -> date:
    """Calendar day of the block's start in the grid zone."""
    return to_local(block.start_at, tz).date()


def group_blocks_by_day(blocks: Iterable[WorkBlock], tz: tzinfo) -> Dict[date, List[WorkBlock]]:
    """Bucket blocks by the local date of their start, keeping input order per day."""
    grouped: Dict[date, List[WorkBlock]] = defaultdict(list)
    for block in blocks:
        grouped[local_day(block, tz)].append(block)
    return dict(grouped)


class GridLayoutEngine:
    """Composes week range, lane assignment and time geometry into placements."""

    def __init__(self, config: GridConfig):
        self.config = config
        self.geometry = TimeGeometry.from_config(config)

    def grid_bounds(self, day: date, tz=None):
        """(grid_start, grid_end) datetimes for a day; tz=None gives naive bounds."""
        grid_start = datetime.combine(day, time(self.config.start_hour), tzinfo=tz)
        return grid_start, grid_start + timedelta(minutes=self.config.grid_minutes)

    def layout_week(self, blocks: Sequence[WorkBlock], reference: Union[date, datetime]) -> WeekLayout:
        tz = self.config.tzinfo
        if isinstance(reference, datetime):
            reference = to_local(reference, tz)

        by_day = group_blocks_by_day(blocks, tz)
        days = [
            self._layout_records(day, idx, assign_lanes(by_day.get(day, [])))
            for idx, day in enumerate(week_days(reference))
        ]
        return WeekLayout(week=week_range(reference), days=days)

    def layout_day(self, blocks: Sequence[WorkBlock], day: date) -> DayLayout:
        """Lay out one day column; blocks starting on other days are ignored."""
        tz = self.config.tzinfo
        day_blocks = [b for b in blocks if local_day(b, tz) == day]
        return self._layout_records(day, day.weekday(), assign_lanes(day_blocks))

    def _layout_records(self, day: date, day_index: int, records: List[LaneRecord]) -> DayLayout:
        placements = [self.place(record, day) for record in records]
        return DayLayout(
            day=day,
            day_index=day_index,
            x=self.config.column_x(day_index),
            total_lanes=records[0].total_lanes if records else 0,
            placements=placements,
        )

    def place(self, record: LaneRecord, day: date) -> BlockPlacement:
        block = record.block
        start = to_local(block.start_at, self.config.tzinfo)
        grid_start, grid_end = self.grid_bounds(day, start.tzinfo)
        clamped = clamp(start, grid_start, grid_end)

        if clamped >= grid_end:
            top = self.geometry.total_height
        else:
            top = self.geometry.time_to_y(clamped)

        # Floor is visual only; the stored duration is untouched
        height = max(
            self.geometry.duration_to_height(block.start_at, block.end_at),
            float(self.config.min_block_height_px),
        )

        width_pct = 100.0 / record.total_lanes
        width = self.config.column_width / record.total_lanes
        return BlockPlacement(
            block=block,
            lane=record.lane,
            total_lanes=record.total_lanes,
            top=top,
            height=height,
            left_pct=record.lane * width_pct,
            width_pct=width_pct,
            left=record.lane * width,
            width=width,
        )
