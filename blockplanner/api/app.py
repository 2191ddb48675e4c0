"""FastAPI web application for blockplanner."""

import logging
from datetime import date, datetime, time
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from blockplanner import __version__
from blockplanner.api.planner_models import BlockListResponse, BlockResponse, TimeLabelsResponse
from blockplanner.config import grid_config_from_env
from blockplanner.database.database import get_db
from blockplanner.database.models import to_utc_naive
from blockplanner.database.work_block_repository import WorkBlockRepository
from blockplanner.engine.capacity import CapacitySummary, summarize_capacity
from blockplanner.engine.layout import GridLayoutEngine
from blockplanner.engine.timezones import hour_labels
from blockplanner.engine.week_range import week_range
from blockplanner.errors import BlockNotFoundError, InvalidRangeError
from blockplanner.models.grid import GridConfig
from blockplanner.models.layout import WeekLayout, WeekRange
from blockplanner.models.work_block import (
    BlockFilters,
    WorkBlockCreate,
    WorkBlockStatus,
    WorkBlockUpdate,
)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="blockplanner API",
    description="Weekly work-block planner: block store and grid layout",
    version=__version__,
)


@lru_cache(maxsize=1)
def get_grid_config() -> GridConfig:
    """Grid configuration for this process (dependency, overridable in tests)."""
    return grid_config_from_env()


def get_repository(db: Session = Depends(get_db)) -> WorkBlockRepository:
    return WorkBlockRepository(db)


def _filters(
    user_id: Optional[str] = Query(None),
    project_id: Optional[str] = Query(None),
    task_id: Optional[str] = Query(None),
    status: Optional[WorkBlockStatus] = Query(None),
) -> BlockFilters:
    return BlockFilters(user_id=user_id, project_id=project_id, task_id=task_id, status=status)


def _local_week(config: GridConfig, week: Optional[date]) -> WeekRange:
    """Week window in the grid zone; defaults to the current week."""
    if week is None:
        return week_range(datetime.now(config.tzinfo))
    return week_range(datetime.combine(week, time(0), tzinfo=config.tzinfo))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/planner/blocks", response_model=BlockListResponse)
async def list_blocks(
    start: datetime = Query(..., description="Window start (ISO-8601)"),
    end: datetime = Query(..., description="Window end (ISO-8601)"),
    filters: BlockFilters = Depends(_filters),
    repo: WorkBlockRepository = Depends(get_repository),
):
    """List blocks overlapping [start, end]."""
    # Naive bounds are UTC, as in the store
    if to_utc_naive(end) <= to_utc_naive(start):
        raise HTTPException(status_code=400, detail="end must be after start")
    blocks = repo.get_blocks(start, end, filters)
    return BlockListResponse(blocks=blocks, count=len(blocks))


@app.post("/planner/blocks", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
async def create_block(
    data: WorkBlockCreate,
    repo: WorkBlockRepository = Depends(get_repository),
):
    """Create a block."""
    try:
        return BlockResponse(block=repo.create_block(data))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create block: {str(e)}")


@app.put("/planner/blocks/{block_id}", response_model=BlockResponse)
async def update_block(
    block_id: str,
    data: WorkBlockUpdate,
    repo: WorkBlockRepository = Depends(get_repository),
):
    """Update a block; also the commit target of drag and resize."""
    try:
        updated = repo.update_block(block_id, data)
        if updated is None:
            raise BlockNotFoundError(block_id)
        return BlockResponse(block=updated)
    except BlockNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Update of block {block_id} failed: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to update block: {str(e)}")


@app.delete("/planner/blocks/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_block(
    block_id: str,
    repo: WorkBlockRepository = Depends(get_repository),
):
    """Delete a block."""
    if not repo.delete_block(block_id):
        raise HTTPException(status_code=404, detail=str(BlockNotFoundError(block_id)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/planner/layout", response_model=WeekLayout)
async def week_layout(
    week: Optional[date] = Query(None, description="Any date in the week (defaults to today)"),
    filters: BlockFilters = Depends(_filters),
    repo: WorkBlockRepository = Depends(get_repository),
    config: GridConfig = Depends(get_grid_config),
):
    """Lane-assigned placements for every block of the week."""
    window = _local_week(config, week)
    blocks = repo.get_blocks(window.start, window.end, filters)
    return GridLayoutEngine(config).layout_week(blocks, window.start)


@app.get("/planner/capacity", response_model=CapacitySummary)
async def week_capacity(
    week: Optional[date] = Query(None, description="Any date in the week (defaults to today)"),
    filters: BlockFilters = Depends(_filters),
    repo: WorkBlockRepository = Depends(get_repository),
    config: GridConfig = Depends(get_grid_config),
):
    """Planned minutes per day and per user for the week."""
    window = _local_week(config, week)
    blocks = repo.get_blocks(window.start, window.end, filters)
    return summarize_capacity(blocks, window.start, config.tzinfo)


@app.get("/planner/time-labels", response_model=TimeLabelsResponse)
async def time_labels(
    day: Optional[date] = Query(None, description="Day whose offsets to use (defaults to today)"),
    config: GridConfig = Depends(get_grid_config),
):
    """Hour labels for the local zone and each secondary zone."""
    on = day or datetime.now(config.tzinfo).date()
    return TimeLabelsResponse(
        timezones=[tz.label for tz in config.timezone_labels],
        rows=hour_labels(config, on),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
