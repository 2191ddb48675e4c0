"""Pointer interaction types for blockplanner.

Backend-agnostic descriptions of pointer events in grid coordinates, plus the
session and outcome records of the drag/resize state machine. Coordinates are
absolute within the grid: x includes the time gutter, y includes the header.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple, Union

from blockplanner.models.work_block import TimeRangePatch, WorkBlock


class InteractionState(str, Enum):
    """Controller states."""
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING_TOP = "resizing_top"
    RESIZING_BOTTOM = "resizing_bottom"


class DragMode(str, Enum):
    """What a pointer-down on a block starts."""
    MOVE = "move"
    MOVE_DAY = "move_day"  # whole calendar days, time of day kept
    RESIZE_TOP = "resize_top"
    RESIZE_BOTTOM = "resize_bottom"


_STATE_FOR_MODE = {
    DragMode.MOVE: InteractionState.DRAGGING,
    DragMode.MOVE_DAY: InteractionState.DRAGGING,
    DragMode.RESIZE_TOP: InteractionState.RESIZING_TOP,
    DragMode.RESIZE_BOTTOM: InteractionState.RESIZING_BOTTOM,
}


def state_for_mode(mode: DragMode) -> InteractionState:
    return _STATE_FOR_MODE[mode]


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @classmethod
    def of(cls, block: WorkBlock) -> "TimeRange":
        return cls(start=block.start_at, end=block.end_at)


@dataclass(frozen=True)
class PointerDown:
    block: WorkBlock
    x: float
    y: float
    mode: DragMode = DragMode.MOVE
    pointer_id: int = 0


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float
    pointer_id: int = 0


@dataclass(frozen=True)
class PointerUp:
    x: float
    y: float
    pointer_id: int = 0


@dataclass(frozen=True)
class PointerCancel:
    pointer_id: int = 0


PointerEvent = Union[PointerDown, PointerMove, PointerUp, PointerCancel]


@dataclass
class DragSession:
    """State of one active drag or resize, alive from pointer-down to pointer-up."""

    block: WorkBlock
    mode: DragMode
    pointer_id: int
    pointer_origin: Tuple[float, float]
    original_range: TimeRange
    grab_offset_y: float  # pointer y minus the y of the edge being moved
    preview_range: Optional[TimeRange] = None
    moved: bool = False


@dataclass(frozen=True)
class CommitRequest:
    """Update request emitted on pointer-up after a real drag or resize."""

    block_id: str
    start_at: datetime
    end_at: datetime

    def to_patch(self) -> TimeRangePatch:
        return TimeRangePatch(start_at=self.start_at, end_at=self.end_at)


class OutcomeKind(str, Enum):
    """What a pointer-up resolved to."""
    IGNORED = "ignored"  # no active session
    CLICK = "click"  # never left the dead zone; the block's click handler may fire
    NOOP = "noop"  # moved, but landed on the original range
    COMMIT = "commit"


@dataclass(frozen=True)
class PointerUpOutcome:
    kind: OutcomeKind
    block: Optional[WorkBlock] = None
    request: Optional[CommitRequest] = None
