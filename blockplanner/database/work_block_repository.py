"""Repository for WorkBlock database operations.

This is the SQLAlchemy-backed BlockStore used by the API and by the
interaction controller's commits.
"""

import logging
from datetime import datetime
from typing import List, Optional, Union
from sqlalchemy.orm import Session

from blockplanner.database.models import WorkBlockDB, enum_to_value, to_utc_naive
from blockplanner.errors import ensure_valid_range
from blockplanner.models.work_block import (
    BlockFilters,
    TimeRangePatch,
    WorkBlock,
    WorkBlockCreate,
    WorkBlockUpdate,
)

logger = logging.getLogger(__name__)

_ENUM_FIELDS = {"type", "status", "importance"}
_BLANK_TO_NULL_FIELDS = {"notes", "location"}
_REQUIRED_FIELDS = {"title", "start_at", "end_at", "type", "status"}


class WorkBlockRepository:
    """Repository for WorkBlock database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, block_id: str) -> Optional[WorkBlockDB]:
        return self.db.query(WorkBlockDB).filter(WorkBlockDB.id == block_id).first()

    def get_by_id(self, block_id: str) -> Optional[WorkBlock]:
        row = self._row(block_id)
        return row.to_pydantic() if row else None

    def get_blocks(
        self,
        week_start: datetime,
        week_end: datetime,
        filters: Optional[BlockFilters] = None,
    ) -> List[WorkBlock]:
        """Blocks overlapping [week_start, week_end], ordered by start.

        Overlap is (start_at < week_end) AND (end_at > week_start), so a block
        that crosses a window edge is still returned.
        """
        query = self.db.query(WorkBlockDB).filter(
            WorkBlockDB.start_at < to_utc_naive(week_end),
            WorkBlockDB.end_at > to_utc_naive(week_start),
        )
        if filters is not None:
            if filters.user_id:
                query = query.filter(WorkBlockDB.user_id == filters.user_id)
            if filters.project_id:
                query = query.filter(WorkBlockDB.project_id == filters.project_id)
            if filters.task_id:
                query = query.filter(WorkBlockDB.task_id == filters.task_id)
            if filters.status:
                query = query.filter(WorkBlockDB.status == enum_to_value(filters.status))

        rows = query.order_by(WorkBlockDB.start_at, WorkBlockDB.created_at).all()
        return [row.to_pydantic() for row in rows]

    def create_block(self, data: WorkBlockCreate) -> WorkBlock:
        """Create a new block."""
        try:
            row = WorkBlockDB.from_create(data)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created work block {row.id}: {row.title[:50]}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create work block: {type(e).__name__}: {str(e)}")
            raise

    def update_block(
        self,
        block_id: str,
        patch: Union[TimeRangePatch, WorkBlockUpdate],
    ) -> Optional[WorkBlock]:
        """Apply a time-range patch or a partial update.

        Returns None if the block does not exist.

        Raises:
            InvalidRangeError: If the merged range would not end after it starts
        """
        try:
            row = self._row(block_id)
            if row is None:
                return None

            fields = {
                name: value
                for name, value in patch.model_dump(exclude_unset=True).items()
                if not (name in _REQUIRED_FIELDS and value is None)
            }
            if "start_at" in fields:
                fields["start_at"] = to_utc_naive(fields["start_at"])
            if "end_at" in fields:
                fields["end_at"] = to_utc_naive(fields["end_at"])
            ensure_valid_range(fields.get("start_at", row.start_at), fields.get("end_at", row.end_at))

            for name, value in fields.items():
                if name in _ENUM_FIELDS:
                    value = enum_to_value(value)
                elif name in _BLANK_TO_NULL_FIELDS:
                    value = value or None
                setattr(row, name, value)

            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Updated work block {block_id}: {sorted(fields)}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update work block {block_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_block(self, block_id: str) -> bool:
        """Delete a block. Returns False if it did not exist."""
        try:
            deleted_count = self.db.query(WorkBlockDB).filter(WorkBlockDB.id == block_id).delete()
            self.db.commit()
            logger.debug(f"Deleted {deleted_count} work block(s) with id {block_id}")
            return deleted_count > 0
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete work block {block_id}: {type(e).__name__}: {str(e)}")
            raise
