"""
Database configuration and session management.

One engine per process; sessions are request-scoped through the get_db()
dependency, or explicitly scoped with get_db_context() in background jobs
and the CLI.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from shared.config.settings import DATABASE_URL, settings


def _engine_options(url: str) -> dict[str, Any]:
    """Pool and connect options for the configured driver."""
    if url.startswith("sqlite"):
        # SQLite: no server pool, allow use from the threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "connect_args": {"connect_timeout": settings.db_connect_timeout},
    }


engine = create_engine(DATABASE_URL, echo=False, **_engine_options(DATABASE_URL))

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/{restaurant_id}")
        def list_dishes(restaurant_id: str, db: Session = Depends(get_db)):
            ...

    The session is closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for sessions outside of FastAPI (scheduler, CLI).

    Usage:
        with get_db_context() as db:
            DailyGeneratorService(db).generate_daily()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit, rolling back on failure. Re-raises the original exception.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
