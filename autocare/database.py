"""
Async database engine, session factory and schema bootstrap.
"""
import logging
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from autocare.config import Settings, get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


class Base(DeclarativeBase):
    """Declarative base for all models."""


engine = create_async_engine(settings.database_url, echo=settings.debug)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request."""
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables(bind: AsyncEngine) -> None:
    # Models must be imported so their tables are registered on Base.metadata
    import autocare.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(bind: AsyncEngine = engine, app_settings: Optional[Settings] = None) -> None:
    """Create tables and seed the service catalogue and default staff."""
    from autocare.seed import seed_defaults

    await create_tables(bind)
    session_factory = async_sessionmaker(bind, expire_on_commit=False)
    async with session_factory() as session:
        await seed_defaults(session, app_settings or get_settings())
    logger.info("Database ready at %s", bind.url.render_as_string(hide_password=True))
