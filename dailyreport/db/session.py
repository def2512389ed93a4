"""
Database session management. SQLAlchemy 2.x style.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from dailyreport.config import get_settings


def engine_options(database_url: str, *, connect_timeout: int = 10, echo: bool = False) -> dict[str, Any]:
    """Return create_engine keyword arguments for the given URL.

    SQLite gets a single shared connection for in-memory databases; Postgres
    gets the pooled, UTC-pinned configuration.
    """
    if database_url.startswith("sqlite"):
        options: dict[str, Any] = {
            "echo": echo,
            "connect_args": {"check_same_thread": False},
        }
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "echo": echo,
        "connect_args": {
            "connect_timeout": connect_timeout,
            "options": "-c timezone=UTC",
        },
    }


settings = get_settings()
engine = create_engine(
    settings.database_url,
    **engine_options(
        settings.database_url,
        connect_timeout=settings.db_connect_timeout,
        echo=settings.debug,
    ),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


def check_db_connection() -> None:
    """
    Verify database connectivity. Raises if unreachable.
    Call during application startup.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
