"""
Database configuration and session management.

Provides the SQLAlchemy async engine, the session factory used by the
relational unit of work, and startup/shutdown helpers.
"""

from pathlib import Path

from sqlalchemy import event, make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from rewards.core.config import settings
from rewards.core.logging_config import get_logger
from rewards.models.base import Base

logger = get_logger(__name__)


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create and configure an async SQLAlchemy engine.

    For SQLite:
    - In-memory databases use StaticPool so every session sees the same
      database
    - File databases keep the default pool (one connection per session)
    - Foreign keys are enforced on every connection

    Args:
        database_url: SQLAlchemy URL
        echo: Log every SQL statement

    Returns:
        Configured AsyncEngine instance
    """
    is_sqlite = database_url.startswith("sqlite")
    is_memory = is_sqlite and ":memory:" in database_url

    engine_kwargs: dict = {"echo": echo}
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    if is_memory:
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(database_url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not is_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to ``engine``.

    Objects are not expired on commit; sessions never autoflush so that
    reads inside a unit of work don't emit half-staged writes.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Global async engine instance
# Created once at import and reused
engine = create_engine_for_url(settings.database_url, echo=settings.db_echo)

# Async session factory
async_session_maker = create_session_factory(engine)


async def create_tables(target: AsyncEngine) -> None:
    """
    Create every table registered on the declarative base.
    """
    # Import models so metadata is populated before create_all()
    from rewards import models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _ensure_sqlite_directory(database_url: str) -> None:
    # SQLite creates the file but not its parent directory
    if not database_url.startswith("sqlite"):
        return
    database = make_url(database_url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


async def init_db() -> None:
    """
    Initialize the database.

    Creates missing tables when DB_CREATE_ALL is enabled and checks that
    the database answers.
    """
    _ensure_sqlite_directory(settings.database_url)

    if settings.db_create_all:
        await create_tables(engine)

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))

    logger.info(
        "Database initialized",
        extra={"dialect": engine.dialect.name, "create_all": settings.db_create_all},
    )


async def close_db() -> None:
    """
    Close the database connection pool.

    Should be called at application shutdown.
    """
    await engine.dispose()
