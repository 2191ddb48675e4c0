"""Lane assignment for overlapping blocks.

Greedy interval partitioning: blocks are taken in start order and dropped into
the first lane whose last block has already ended. This uses the minimum number
of lanes, which equals the peak number of simultaneously open blocks.
"""

from typing import List, Sequence

from blockplanner.models.layout import LaneRecord
from blockplanner.models.work_block import WorkBlock


def assign_lanes(blocks: Sequence[WorkBlock]) -> List[LaneRecord]:
    """Assign lanes to one day's blocks.

    Args:
        blocks: Blocks of a single day, in any order

    Returns:
        LaneRecords in start order. Equal starts keep their input order. Every
        record carries the day's final lane count.
    """
    if not blocks:
        return []

    # sorted() is stable: equal starts keep input order
    ordered = sorted(blocks, key=lambda b: b.start_at)

    lane_ends = []
    assignments = []
    for block in ordered:
        lane = None
        for i, lane_end in enumerate(lane_ends):
            # Touching endpoints do not overlap
            if lane_end <= block.start_at:
                lane = i
                break
        if lane is None:
            lane = len(lane_ends)
            lane_ends.append(block.end_at)
        else:
            lane_ends[lane] = block.end_at
        assignments.append((block, lane))

    total_lanes = len(lane_ends)
    return [LaneRecord(block=block, lane=lane, total_lanes=total_lanes) for block, lane in assignments]


def max_concurrency(blocks: Sequence[WorkBlock]) -> int:
    """Peak number of blocks open at the same instant (sweep line).

    Ends sort before starts at the same instant, so back-to-back blocks never
    count as concurrent.
    """
    events = []
    for b in blocks:
        events.append((b.start_at, 1))
        events.append((b.end_at, -1))
    events.sort(key=lambda e: (e[0], e[1]))

    open_count = 0
    peak = 0
    for _, delta in events:
        open_count += delta
        peak = max(peak, open_count)
    return peak
