"""
Host ledger substrate for the NarrativeShift components.

The components run on top of a shared ledger that gives them three things:
an atomic transaction per operation, a network clock, and the native-currency
transfer primitive. This module provides a database-backed rendition of that
substrate: one SQLAlchemy transaction per operation and a balance table in
the smallest unit of the native currency.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from narrative_shift.core.errors import InsufficientFundsError, InvalidTransferAmountError
from narrative_shift.core.identity import normalize_identity
from narrative_shift.models import LedgerBalanceORM
from narrative_shift.utils.db_session import (
    get_async_session_factory,
    get_db_session_context_manager,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


class HostLedger:
    """
    Transaction boundary, clock and native-currency primitive shared by all components.
    """
    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initializes the HostLedger.

        Args:
            session_factory: Factory for database sessions. Defaults to the
                             service-wide factory built from settings.
            clock: Callable returning the network time in unix seconds.
        """
        self._session_factory = session_factory
        self._clock = clock or system_clock

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_async_session_factory()
        return self._session_factory

    def unix_timestamp(self) -> int:
        return int(self._clock())

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Runs the body as one atomic operation.

        Everything written through the yielded session is committed together
        when the body returns, or discarded together when it raises.
        """
        async with get_db_session_context_manager(self.session_factory) as session:
            yield session

    async def _locked_balance(self, session: AsyncSession, identity: str) -> Optional[LedgerBalanceORM]:
        result = await session.execute(
            select(LedgerBalanceORM)
            .where(LedgerBalanceORM.identity == identity)
            .with_for_update()
        )
        return result.scalars().first()

    async def balance_of(self, session: AsyncSession, identity: str, for_update: bool = False) -> int:
        """Balance of *identity*, 0 if it never held funds. *for_update* locks the row."""
        identity = normalize_identity(identity)
        if for_update:
            account = await self._locked_balance(session, identity)
            return account.balance if account is not None else 0
        result = await session.execute(
            select(LedgerBalanceORM.balance).where(LedgerBalanceORM.identity == identity)
        )
        balance = result.scalar_one_or_none()
        return balance or 0

    async def credit(self, session: AsyncSession, identity: str, amount: int) -> int:
        """
        Mints *amount* native units into *identity*'s balance.

        Returns:
            The new balance.
        """
        identity = normalize_identity(identity)
        if not isinstance(amount, int) or amount <= 0:
            raise InvalidTransferAmountError("Credit amount must be a positive integer")

        account = await self._locked_balance(session, identity)
        if account is None:
            account = LedgerBalanceORM(identity=identity, balance=0)
            session.add(account)
        account.balance += amount
        await session.flush()
        logger.info(f"Credited {amount} units to {identity}")
        return account.balance

    async def transfer(self, session: AsyncSession, from_identity: str, to_identity: str, amount: int) -> None:
        """
        Moves *amount* native units between two identities.

        Raises:
            InvalidTransferAmountError: If amount is negative or not an integer.
            InsufficientFundsError: If the source holds fewer than *amount* units.
        """
        from_identity = normalize_identity(from_identity)
        to_identity = normalize_identity(to_identity)
        if not isinstance(amount, int) or amount < 0:
            raise InvalidTransferAmountError()

        source = await self._locked_balance(session, from_identity)
        available = source.balance if source is not None else 0
        if available < amount:
            raise InsufficientFundsError(from_identity, required=amount, available=available)

        if from_identity == to_identity or amount == 0:
            return

        destination = await self._locked_balance(session, to_identity)
        if destination is None:
            destination = LedgerBalanceORM(identity=to_identity, balance=0)
            session.add(destination)

        source.balance -= amount
        destination.balance += amount
        await session.flush()
        logger.debug(f"Transferred {amount} units from {from_identity} to {to_identity}")
