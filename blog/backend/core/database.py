"""
Database Engine and Sessions.

The engine and session factory are created on first use, so importing
this module never touches configuration or the network. Routes receive
a session through get_db_session(); the CLI and the app lifespan use
create_all() and dispose_engine().
"""

from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blog.backend.core.config_schema import DatabaseSchema
from blog.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(db: DatabaseSchema) -> dict[str, Any]:
    """Pool options apply to server databases only; aiosqlite has no pool sizing."""
    options: dict[str, Any] = {"echo": db.echo}
    if not db.driver.startswith("sqlite"):
        options.update(
            pool_size=db.pool_size,
            max_overflow=db.max_overflow,
            pool_timeout=db.pool_timeout,
            pool_recycle=db.pool_recycle,
            pool_pre_ping=True,
        )
    return options


def get_engine() -> AsyncEngine:
    """The process-wide engine."""
    global _engine
    if _engine is None:
        from blog.backend.core.config import get_app_config, get_database_url

        db = get_app_config().database
        _engine = create_async_engine(get_database_url(), **_engine_options(db))
        logger.debug("Database engine created", extra={"driver": db.driver, "name": db.name})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """The process-wide session factory. Objects stay usable after commit."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _session_factory


async def create_all() -> None:
    """Create the tables of every model that does not exist yet."""
    import blog.backend.models  # noqa: F401  registers all tables
    from blog.backend.models.base import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    Session for one request: committed when the endpoint returns,
    rolled back when it raises.

    Usage:
        DbSession = Annotated[AsyncSession, Depends(get_db_session)]
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()
