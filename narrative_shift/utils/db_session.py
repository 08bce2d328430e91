from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from typing import AsyncGenerator, Optional
from functools import lru_cache
from contextlib import asynccontextmanager

from narrative_shift.config.settings import settings

@lru_cache
def get_async_engine() -> AsyncEngine:
    """Returns a cached instance of the async engine."""
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_recycle=3600,
    )

def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Builds a session factory bound to *engine* with the service's session options."""
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
        class_=AsyncSession,
    )

@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Returns a cached instance of the async session factory."""
    return make_session_factory(get_async_engine())

@asynccontextmanager
async def get_db_session_context_manager(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an SQLAlchemy async session scoped to a single transaction.

    The session is committed on successful exit, rolled back when the body
    raises (the exception is re-raised), and closed regardless.
    """
    factory = session_factory or get_async_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
