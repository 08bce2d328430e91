"""Database health check utilities."""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


async def check_db_connection(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """
    Test database connection for health checks.

    Returns:
        bool: True if connection successful, False otherwise.
    """
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {e}")
        return False
