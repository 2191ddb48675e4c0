"""Error types for blockplanner.

Out-of-bounds drags are clamped, not raised, so they have no type here.
"""

from typing import Optional


class PlannerError(Exception):
    """Base class for planner errors."""


class InvalidRangeError(PlannerError, ValueError):
    """A proposed range does not end after it starts."""

    def __init__(self, start_at, end_at):
        self.start_at = start_at
        self.end_at = end_at
        super().__init__(f"Invalid range: end {end_at} is not after start {start_at}")


class BlockNotFoundError(PlannerError, LookupError):
    """No block with the given id exists in the store."""

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"WorkBlock with id {block_id} not found")


class CommitFailure(PlannerError):
    """The store rejected or could not apply a drag/resize commit.

    The original exception, if any, is chained as ``__cause__``.
    """

    def __init__(self, block_id: str, message: Optional[str] = None):
        self.block_id = block_id
        super().__init__(message or f"Failed to commit new range for block {block_id}")


def ensure_valid_range(start_at, end_at) -> None:
    """Raise InvalidRangeError unless end_at > start_at."""
    if end_at <= start_at:
        raise InvalidRangeError(start_at, end_at)
