"""Drag-to-move and drag-to-resize state machine.

States: IDLE -> DRAGGING | RESIZING_TOP | RESIZING_BOTTOM -> IDLE. DRAGGING covers
both the snapped time-grid move and the whole-day move (DragMode.MOVE_DAY).

A pointer-down on a block opens a DragSession. Moves past the dead zone
produce a snapped, clamped preview range keyed by block id; the canonical
block collection is never touched. Pointer-up either resolves to a click
(no preview), a no-op (preview equals the original range), or a
CommitRequest. The preview stays visible until commit() settles, and a block
with a commit outstanding cannot be picked up again.
"""

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Protocol, Sequence, Set, Union

from blockplanner.engine.geometry import TimeGeometry, clamp, snap_minutes, to_local
from blockplanner.engine.store import BlockStore
from blockplanner.engine.week_range import week_days
from blockplanner.errors import CommitFailure, InvalidRangeError, ensure_valid_range
from blockplanner.models.grid import GridConfig
from blockplanner.models.interaction import (
    CommitRequest,
    DragMode,
    DragSession,
    InteractionState,
    OutcomeKind,
    PointerCancel,
    PointerDown,
    PointerEvent,
    PointerMove,
    PointerUp,
    PointerUpOutcome,
    TimeRange,
    state_for_mode,
)
from blockplanner.models.work_block import WorkBlock

_MINUTE = timedelta(minutes=1)


class PointerHost(Protocol):
    """The surface the controller is attached to (a canvas, a widget, a test double)."""

    def capture_pointer(self, pointer_id: int) -> None:
        ...

    def release_pointer(self, pointer_id: int) -> None:
        ...

    def add_listeners(self, controller: "PointerInteractionController") -> None:
        ...

    def remove_listeners(self, controller: "PointerInteractionController") -> None:
        ...


class NullPointerHost:
    """Host that does nothing; used when events are fed to the controller directly."""

    def capture_pointer(self, pointer_id: int) -> None:
        pass

    def release_pointer(self, pointer_id: int) -> None:
        pass

    def add_listeners(self, controller) -> None:
        pass

    def remove_listeners(self, controller) -> None:
        pass


class PointerInteractionController:
    """Drives drag and resize of work blocks on one rendered week grid."""

    def __init__(
        self,
        config: GridConfig,
        week_reference: Union[date, datetime],
        store: Optional[BlockStore] = None,
        host: Optional[PointerHost] = None,
    ):
        self.config = config
        self.geometry = TimeGeometry.from_config(config)
        self.store = store
        self.host = host or NullPointerHost()
        self.session: Optional[DragSession] = None
        self.previews: Dict[str, TimeRange] = {}
        self.pending: Set[str] = set()
        self.set_week(week_reference)

    # -- state -----------------------------------------------------------

    @property
    def state(self) -> InteractionState:
        if self.session is None:
            return InteractionState.IDLE
        return state_for_mode(self.session.mode)

    def set_week(self, week_reference: Union[date, datetime]) -> None:
        """Point the controller at another week. Only allowed while idle."""
        if self.session is not None:
            raise RuntimeError("Cannot change week during an active drag")
        if isinstance(week_reference, datetime):
            week_reference = to_local(week_reference, self.config.tzinfo)
        self.days: List[date] = week_days(week_reference)

    def is_pending(self, block_id: str) -> bool:
        return block_id in self.pending

    def preview_for(self, block_id: str) -> Optional[TimeRange]:
        return self.previews.get(block_id)

    def apply_previews(self, blocks: Sequence[WorkBlock]) -> List[WorkBlock]:
        """Blocks with preview ranges substituted, for optimistic rendering."""
        result = []
        for block in blocks:
            preview = self.previews.get(block.id) if block.id is not None else None
            if preview is None:
                result.append(block)
            else:
                result.append(block.model_copy(update={"start_at": preview.start, "end_at": preview.end}))
        return result

    # -- events ----------------------------------------------------------

    def dispatch(self, event: PointerEvent):
        """Route a pointer event to its handler and return the handler's result."""
        if isinstance(event, PointerDown):
            return self.pointer_down(event.block, event.x, event.y, event.mode, event.pointer_id)
        if isinstance(event, PointerMove):
            return self.pointer_move(event.x, event.y, event.pointer_id)
        if isinstance(event, PointerUp):
            return self.pointer_up(event.x, event.y, event.pointer_id)
        if isinstance(event, PointerCancel):
            return self.pointer_cancel(event.pointer_id)
        raise TypeError(f"Unsupported pointer event: {type(event).__name__}")

    def pointer_down(
        self,
        block: WorkBlock,
        x: float,
        y: float,
        mode: DragMode = DragMode.MOVE,
        pointer_id: int = 0,
    ) -> bool:
        """Start a drag or resize session. Returns False if the press is ignored."""
        if self.session is not None:
            return False
        if block.id is None or block.id in self.pending:
            return False

        original = TimeRange.of(block)
        anchor_day = self._local_day(original.start)
        edge = original.end if mode == DragMode.RESIZE_BOTTOM else original.start
        edge_y = self.geometry.minutes_to_y(self._minutes_into_grid(edge, anchor_day))

        self.session = DragSession(
            block=block,
            mode=mode,
            pointer_id=pointer_id,
            pointer_origin=(x, y),
            original_range=original,
            grab_offset_y=self.config.content_y(y) - edge_y,
        )
        self.host.capture_pointer(pointer_id)
        self.host.add_listeners(self)
        return True

    def pointer_move(self, x: float, y: float, pointer_id: Optional[int] = None) -> Optional[TimeRange]:
        """Recompute the preview for the active session. Returns the new preview, if any."""
        s = self.session
        if s is None or (pointer_id is not None and pointer_id != s.pointer_id):
            return None

        if not s.moved:
            ox, oy = s.pointer_origin
            if abs(x - ox) + abs(y - oy) <= self.config.drag_dead_zone_px:
                return None
            s.moved = True

        if s.mode == DragMode.MOVE:
            candidate = self._drag_target(s, x, y)
        elif s.mode == DragMode.MOVE_DAY:
            candidate = self._day_shift_target(s, x)
        else:
            candidate = self._resize_target(s, y)

        ensure_valid_range(candidate.start, candidate.end)
        s.preview_range = candidate
        self.previews[s.block.id] = candidate
        return candidate

    def pointer_up(self, x: float, y: float, pointer_id: Optional[int] = None) -> PointerUpOutcome:
        """End the session and decide between click, no-op and commit."""
        s = self.session
        if s is None or (pointer_id is not None and pointer_id != s.pointer_id):
            return PointerUpOutcome(kind=OutcomeKind.IGNORED)

        self.pointer_move(x, y, pointer_id)
        self._end_session(s)

        if s.preview_range is None:
            return PointerUpOutcome(kind=OutcomeKind.CLICK, block=s.block)

        if s.preview_range == s.original_range:
            self.previews.pop(s.block.id, None)
            return PointerUpOutcome(kind=OutcomeKind.NOOP, block=s.block)

        request = CommitRequest(
            block_id=s.block.id,
            start_at=s.preview_range.start,
            end_at=s.preview_range.end,
        )
        self.pending.add(s.block.id)
        return PointerUpOutcome(kind=OutcomeKind.COMMIT, block=s.block, request=request)

    def pointer_cancel(self, pointer_id: Optional[int] = None) -> bool:
        """Abort the session and drop its preview."""
        s = self.session
        if s is None or (pointer_id is not None and pointer_id != s.pointer_id):
            return False
        self._end_session(s)
        self.previews.pop(s.block.id, None)
        return True

    # -- commit ----------------------------------------------------------

    def commit(self, request: CommitRequest) -> WorkBlock:
        """Send a commit request to the store.

        The preview and pending mark are cleared once the call settles, whether
        it succeeded or not. Failures are raised, never retried.

        Raises:
            InvalidRangeError: If the requested range does not end after it starts
            CommitFailure: If the store raised or no longer has the block
        """
        try:
            ensure_valid_range(request.start_at, request.end_at)
        except InvalidRangeError:
            self._settle(request.block_id)
            raise

        if self.store is None:
            self._settle(request.block_id)
            raise CommitFailure(request.block_id, "No block store configured")

        try:
            updated = self.store.update_block(request.block_id, request.to_patch())
        except Exception as e:
            raise CommitFailure(request.block_id) from e
        finally:
            self._settle(request.block_id)

        if updated is None:
            raise CommitFailure(request.block_id, f"WorkBlock {request.block_id} no longer exists")
        return updated

    # -- internals -------------------------------------------------------

    def _settle(self, block_id: str) -> None:
        self.pending.discard(block_id)
        self.previews.pop(block_id, None)

    def _end_session(self, s: DragSession) -> None:
        self.host.release_pointer(s.pointer_id)
        self.host.remove_listeners(self)
        self.session = None

    def _local_day(self, dt: datetime) -> date:
        return to_local(dt, self.config.tzinfo).date()

    def _grid_start(self, day: date, tz) -> datetime:
        return datetime.combine(day, time(self.config.start_hour), tzinfo=tz)

    def _minutes_into_grid(self, dt: datetime, day: date) -> float:
        local = to_local(dt, self.config.tzinfo)
        return (local - self._grid_start(day, local.tzinfo)) / _MINUTE

    def _at(self, day: date, minutes: float, like: datetime) -> datetime:
        """Datetime `minutes` after the grid start of `day`, in the same zone style as `like`."""
        tz = self.config.tzinfo if like.tzinfo is not None else None
        local = self._grid_start(day, tz) + timedelta(minutes=minutes)
        if like.tzinfo is not None:
            return local.astimezone(like.tzinfo)
        return local

    def _edge_minutes(self, s: DragSession, y: float) -> int:
        """Snapped minutes-from-grid-start of the edge being dragged."""
        edge_y = self.config.content_y(y) - s.grab_offset_y
        raw = self.geometry.y_to_minutes_from_start(edge_y)
        return snap_minutes(raw, self.config.snap_interval_minutes)

    def _drag_target(self, s: DragSession, x: float, y: float) -> TimeRange:
        original = s.original_range
        duration = original.duration
        day = self.days[self.config.day_index_at(x)]

        latest_start = self.config.grid_minutes - duration / _MINUTE
        start_minutes = clamp(self._edge_minutes(s, y), 0, max(0, latest_start))

        new_start = self._at(day, start_minutes, original.start)
        return TimeRange(start=new_start, end=new_start + duration)

    def _day_shift_target(self, s: DragSession, x: float) -> TimeRange:
        """Whole-day move: the column under x picks the day, y is ignored.

        Wall-clock time of day and duration are kept.
        """
        original = s.original_range
        target_day = self.days[self.config.day_index_at(x)]
        shift = timedelta(days=(target_day - self._local_day(original.start)).days)
        return TimeRange(
            start=self._shift_wall_clock(original.start, shift),
            end=self._shift_wall_clock(original.end, shift),
        )

    def _shift_wall_clock(self, dt: datetime, shift: timedelta) -> datetime:
        if dt.tzinfo is None:
            return dt + shift
        return (to_local(dt, self.config.tzinfo) + shift).astimezone(dt.tzinfo)

    def _resize_target(self, s: DragSession, y: float) -> TimeRange:
        original = s.original_range
        day = self._local_day(original.start)
        interval = self.config.snap_interval_minutes
        snapped = self._edge_minutes(s, y)

        if s.mode == DragMode.RESIZE_TOP:
            fixed_end = self._minutes_into_grid(original.end, day)
            start_minutes = min(clamp(snapped, 0, self.config.grid_minutes), fixed_end - interval)
            return TimeRange(start=self._at(day, start_minutes, original.start), end=original.end)

        fixed_start = self._minutes_into_grid(original.start, day)
        end_minutes = max(clamp(snapped, 0, self.config.grid_minutes), fixed_start + interval)
        return TimeRange(start=original.start, end=self._at(day, end_minutes, original.end))
