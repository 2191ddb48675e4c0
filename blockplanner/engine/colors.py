"""Block colors and status markers."""

from typing import Optional

from blockplanner.models.work_block import WorkBlock, WorkBlockStatus, WorkBlockType

PROJECT_PALETTE = [
    "#3b82f6",  # blue-500
    "#a855f7",  # purple-500
    "#10b981",  # emerald-500
    "#f59e0b",  # amber-500
    "#ef4444",  # red-500
    "#14b8a6",  # teal-500
    "#f97316",  # orange-500
    "#6366f1",  # indigo-500
    "#22c55e",  # green-500
    "#e11d48",  # rose-600
]
NEUTRAL_COLOR = "#6b7280"  # gray-500
DEFAULT_TYPE_COLOR = "#f59e0b"

TYPE_COLORS = {
    WorkBlockType.MEETING: "#3b82f6",
    WorkBlockType.FOCUS: "#a855f7",
    WorkBlockType.ADMIN: "#6b7280",
    WorkBlockType.BREAK: "#10b981",
}


def hash_string(value: str) -> int:
    """31-multiplier string hash with signed 32-bit wraparound, made non-negative."""
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def project_color(project_id: Optional[str]) -> str:
    """Stable palette color for a project; neutral gray without one."""
    if not project_id:
        return NEUTRAL_COLOR
    return PROJECT_PALETTE[hash_string(project_id) % len(PROJECT_PALETTE)]


def block_color(block: WorkBlock) -> str:
    """Custom color if set, otherwise the color for the block's type."""
    if block.color:
        return block.color
    return TYPE_COLORS.get(block.type, DEFAULT_TYPE_COLOR)


def status_marker(status: WorkBlockStatus) -> Optional[str]:
    if status in (WorkBlockStatus.CONFIRMED, WorkBlockStatus.COMPLETED):
        return "✓"
    if status == WorkBlockStatus.CANCELLED:
        return "✕"
    return None
