"""Block store collaborator interface.

The engine never persists anything itself. It reads a week of blocks and
writes time-range patches through an object satisfying BlockStore.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Union

from blockplanner.models.work_block import (
    BlockFilters,
    TimeRangePatch,
    WorkBlock,
    WorkBlockCreate,
    WorkBlockUpdate,
)


class BlockStore(Protocol):
    """Abstract interface for the external block store."""

    def get_blocks(
        self,
        week_start: datetime,
        week_end: datetime,
        filters: Optional[BlockFilters] = None,
    ) -> List[WorkBlock]:
        ...

    def update_block(
        self, block_id: str, patch: Union[TimeRangePatch, WorkBlockUpdate]
    ) -> Optional[WorkBlock]:
        ...

    def create_block(self, data: WorkBlockCreate) -> WorkBlock:
        ...

    def delete_block(self, block_id: str) -> bool:
        ...
