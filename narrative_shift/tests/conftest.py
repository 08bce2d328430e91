import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from narrative_shift.core import HostLedger
from narrative_shift.models import Base, LedgerBalanceORM
from narrative_shift.tests.helpers import T0, FixedClock, make_settings
from narrative_shift.utils.db_session import make_session_factory

# Single shared in-memory database per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def db_engine():
    """Yield an in-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return make_session_factory(db_engine)


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def ledger(session_factory, clock):
    return HostLedger(session_factory=session_factory, clock=clock)


@pytest.fixture
def test_settings():
    return make_settings()


@pytest.fixture
def fund(ledger):
    """Credit native units to an identity in its own transaction."""
    async def _fund(identity: str, amount: int) -> None:
        async with ledger.transaction() as session:
            await ledger.credit(session, identity, amount)
    return _fund


@pytest.fixture
def balance(ledger):
    async def _balance(identity: str) -> int:
        async with ledger.transaction() as session:
            return await ledger.balance_of(session, identity)
    return _balance


@pytest.fixture
def count_rows(session_factory):
    async def _count(model) -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count


@pytest.fixture
def total_supply(session_factory):
    async def _total() -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.coalesce(func.sum(LedgerBalanceORM.balance), 0)))
            return result.scalar_one()
    return _total
