"""Database session factory and configuration.

Every administrative call runs against one session acquired per request and
closed on completion. Services flush; routers commit on success. Nothing is
retried here: failures reported by the store propagate immediately.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, Session

from .config import get_settings
from .errors import StoreFailure


def build_engine(database_url: str) -> Engine:
    """Create an engine with connection pooling.

    Pool settings only apply to PostgreSQL (not SQLite).
    """
    engine_kwargs = {
        "pool_pre_ping": True,
        "echo": False,
    }

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = 5
        engine_kwargs["max_overflow"] = 10

    return create_engine(database_url, **engine_kwargs)


engine = build_engine(get_settings().DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context manager for database sessions outside of a request.

    Usage:
        with get_db_session() as session:
            seed_superuser(session, "admin")

    Automatically commits on success, rolls back on exception.
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def flush_or_fail(db: Session) -> None:
    """Flush pending changes, reporting constraint violations as StoreFailure.

    The transaction is rolled back before raising, so nothing of the failed
    call remains pending in the session.
    """
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        raise StoreFailure(str(e.orig)) from e


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints.

    Uncommitted work is rolled back when the session closes, so an aborted
    request never leaves a partial mutation behind.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
