"""Pytest fixtures and configuration for blockplanner tests."""

import pytest
import uuid
from datetime import date, datetime, time
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from blockplanner.database.database import Base, get_db
from blockplanner.database.work_block_repository import WorkBlockRepository
from blockplanner.models.grid import GridConfig
from blockplanner.models.work_block import WorkBlock


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Monday
TEST_MONDAY = date(2024, 1, 15)


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    from blockplanner.database import models  # noqa: F401

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def block_repository(db_session: Session):
    """Create a WorkBlockRepository instance for testing."""
    return WorkBlockRepository(db_session)


@pytest.fixture
def monday():
    return TEST_MONDAY


@pytest.fixture
def grid_config():
    """Default grid: 06:00-22:00, 60px per hour, 15 minute snap, UTC."""
    return GridConfig()


def _parse_hhmm(value):
    if isinstance(value, time):
        return value
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


@pytest.fixture
def make_block():
    """Factory for WorkBlocks on a given day.

    Times are "HH:MM" strings (or time objects) combined naively with the day,
    which the engine reads as grid wall-clock time.
    """
    def _make(start, end, day=TEST_MONDAY, **overrides):
        data = {
            "id": str(uuid.uuid4()),
            "title": "Block",
            "start_at": datetime.combine(day, _parse_hhmm(start)),
            "end_at": datetime.combine(day, _parse_hhmm(end)),
        }
        data.update(overrides)
        return WorkBlock(**data)

    return _make


@pytest.fixture
def test_client(db_session: Session, grid_config: GridConfig):
    """Create a FastAPI test client with overridden database and grid config dependencies."""
    from blockplanner.api.app import app, get_grid_config

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_grid_config] = lambda: grid_config

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
