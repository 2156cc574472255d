import sys
from pathlib import Path

# Put the project root on PYTHONPATH first
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# SQLite engine for tests, created BEFORE the app is imported
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: swap engine and SessionLocal in core.database BEFORE importing the app
import taskboard.core.database
taskboard.core.database.engine = test_engine
taskboard.core.database.SessionLocal = TestingSessionLocal

from taskboard.core.database import Base
from taskboard.core.dependencies import get_store
from taskboard.main import app
from taskboard.services.task_repository import TaskRepository
from taskboard.services.task_store import TaskStore

# Wednesday noon
NOW = datetime(2024, 5, 15, 12, 0)


class FakeClock:
    """Manually driven clock. Time only moves on advance()."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def setup_teardown():
    """Create and clean the DB around each test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """In-memory store, no persistence"""
    return TaskStore(clock=clock)


@pytest.fixture
def repository():
    return TaskRepository(TestingSessionLocal)


@pytest.fixture
def client(repository, clock):
    """FastAPI test client backed by a fresh persisted store"""
    from fastapi.testclient import TestClient

    api_store = TaskStore.from_repository(repository, clock=clock)
    app.dependency_overrides[get_store] = lambda: api_store
    yield TestClient(app)
    app.dependency_overrides.pop(get_store, None)
