"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from tests.test_constants import TEST_INTERNAL_JOB_TOKEN, TEST_NOW_MS

# Force an in-memory database when pytest runs; don't inherit from .env
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("INTERNAL_JOB_TOKEN", TEST_INTERNAL_JOB_TOKEN)
os.environ.setdefault("MIGRATION_AUDIT_ATTRIBUTION", "first_found")
os.environ.setdefault("MIGRATION_STOP_ON_ERROR", "false")


class FakeClock:
    """Settable millisecond clock for InMemoryDocumentStore."""

    def __init__(self, now_ms: int = TEST_NOW_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Clear cached settings so monkeypatched env vars take effect."""
    from dailyreport.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock):
    """Empty in-memory document store with a fixed clock."""
    from dailyreport.store.memory import InMemoryDocumentStore

    return InMemoryDocumentStore(clock=clock)


@pytest.fixture
def db() -> Session:
    """Session on a fresh in-memory SQLite database with all tables created."""
    from dailyreport.db.session import Base
    from dailyreport import models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    session = Session(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sql_store(db: Session):
    from dailyreport.store.sql import SqlDocumentStore

    return SqlDocumentStore(db)


@pytest.fixture(params=["memory", "sql"])
def any_store(request: pytest.FixtureRequest):
    """Each document store implementation in turn."""
    if request.param == "memory":
        return request.getfixturevalue("store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    from dailyreport.main import app

    return TestClient(app)


@pytest.fixture
def client_with_store(store) -> TestClient:
    """TestClient with get_store overridden to use the in-memory store."""
    from dailyreport.api.deps import get_store
    from dailyreport.main import app

    app.dependency_overrides[get_store] = lambda: store
    c = TestClient(app)
    yield c
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def internal_headers() -> dict[str, str]:
    return {"X-Internal-Token": TEST_INTERNAL_JOB_TOKEN}
