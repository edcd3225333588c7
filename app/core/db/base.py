from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings
from app.core.logging import get_logger


Base = declarative_base()

logger = get_logger(__name__)


engine = create_async_engine(
    str(settings.postgres.connection_string),
    echo=settings.postgres.echo,
    pool_size=settings.postgres.pool_size,
    pool_pre_ping=True,
)

# Rows are read back after commit when building API responses
async_session_maker = async_sessionmaker(
    engine,
    expire_on_commit=False,
)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Session for scripts and CLIs; commits on exit, rolls back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Session rolled back due to error: {e!r}")
            raise


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request."""
    async with session_scope() as session:
        yield session
