"""
Database Configuration.

SQLAlchemy async engine and session management.
Uses lazy initialization to prevent import-time failures when config is missing.

Each request gets exactly one session, and that session's transaction is
the unit of atomicity for every note-graph write: the graph is read and
written inside it, then committed once or rolled back as a whole.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from threadnote.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: Any = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_engine() -> Any:
    """Create async SQLAlchemy engine."""
    from threadnote.backend.core.config import get_app_config, get_database_url

    db_config = get_app_config().database
    url = get_database_url()

    if db_config.driver.startswith("sqlite"):
        if db_config.name == ":memory:":
            engine = create_async_engine(
                url,
                echo=db_config.echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            engine = create_async_engine(url, echo=db_config.echo)
    else:
        engine = create_async_engine(
            url,
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
            echo=db_config.echo,
        )
    logger.debug("Database engine created", extra={"driver": db_config.driver})
    return engine


def get_engine() -> Any:
    """
    Get the database engine, creating it on first use.

    Returns:
        SQLAlchemy async engine instance
    """
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the session factory, creating it on first use.

    Returns:
        SQLAlchemy async session factory
    """
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def init_models() -> None:
    """
    Create all tables that do not exist yet.

    Only used when database.yaml sets create_tables: true. SQLite files
    need their parent directory to exist before the first connection.
    """
    from threadnote.backend.core.config import find_project_root, get_app_config
    from threadnote.backend.models import Base

    db_config = get_app_config().database
    if db_config.driver.startswith("sqlite") and db_config.name != ":memory:":
        (find_project_root() / db_config.name).parent.mkdir(parents=True, exist_ok=True)

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def dispose_engine() -> None:
    """Dispose the engine and reset lazy state."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request handler returns, rolls back on any exception
    so that no partial create/update/delete is ever persisted.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
