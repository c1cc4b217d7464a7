"""
Database engine and session management.

Repositories open one short unit of work per call through ``session_scope``,
so single-record writes commit atomically and concurrent readers never share
a Session.

Usage:
    from aiqa.utils.database import init_database, get_session

    init_database("sqlite:///aiqa.db")
    with get_session() as session:
        ...
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from aiqa.config import load_settings
from aiqa.errors import UpstreamUnavailableError
from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="database")

SessionFactory = Callable[[], Session]

# Global engine and session factory, installed by init_database
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine.

    In-memory SQLite shares one connection across threads so that every
    session sees the same database.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log emitted SQL

    Returns:
        Engine instance
    """
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Build a session factory whose objects stay readable after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database(database_url: Optional[str] = None) -> Engine:
    """
    Initialize the global engine, session factory and schema.

    Args:
        database_url: Database URL (default: AIQA_DATABASE_URL or sqlite:///aiqa.db)

    Returns:
        The initialized engine
    """
    global _engine, _session_factory

    from aiqa.models import Base

    database_url = database_url or load_settings().database_url

    _engine = create_db_engine(database_url)
    _session_factory = create_session_factory(_engine)
    Base.metadata.create_all(bind=_engine)

    logger.info("database_initialized", database_url=_redact(database_url))
    return _engine


def get_engine() -> Engine:
    """Return the global engine, initializing with defaults if needed."""
    if _engine is None:
        init_database()
    return _engine


def get_session_factory() -> sessionmaker:
    """Return the global session factory, initializing with defaults if needed."""
    if _session_factory is None:
        init_database()
    return _session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """
    Yield a session from the global factory and close it afterwards.

    The caller controls commit/rollback.
    """
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def session_scope(session_factory: SessionFactory) -> Iterator[Session]:
    """
    Run one unit of work: commit on success, roll back on failure.

    Storage failures are re-raised as UpstreamUnavailableError; domain
    errors raised inside the block pass through unchanged.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("database_operation_failed", error=str(e), error_type=type(e).__name__)
        raise UpstreamUnavailableError(str(e)) from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _redact(database_url: str) -> str:
    """Strip credentials from a database URL before logging."""
    if "@" not in database_url:
        return database_url
    scheme, _, rest = database_url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"
