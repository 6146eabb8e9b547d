"""
Database engine and per-request sessions.

The engine URL comes from ``settings.async_database_url``. SQLite (the
default for local runs and tests) gets no pool sizing; server databases get
a bounded pool with pre-ping.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from proposal_desk.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> Dict[str, Any]:
    """
    Engine keyword arguments for a database URL.

    Args:
        url: Async SQLAlchemy URL

    Returns:
        Keyword arguments for create_async_engine
    """
    options: Dict[str, Any] = {"echo": settings.DEBUG}
    if not url.startswith("sqlite"):
        options.update(pool_pre_ping=True, pool_size=10, max_overflow=20)
    return options


engine = create_async_engine(
    settings.async_database_url,
    **engine_options(settings.async_database_url),
)

# Records stay readable after commit; deletes return the prior state
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    The request's writes form a single transaction: committed when the
    handler returns, rolled back when it raises (including NotFound raised
    after a partial write such as the cascade in proposal delete).
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            logger.debug("Rolling back request transaction")
            await session.rollback()
            raise
        else:
            await session.commit()
