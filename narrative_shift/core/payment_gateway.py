"""
Payment gateway for native-currency transfers.

A thin pass-through to the host ledger's transfer primitive. It performs no
retry and no validation of the amount beyond what the ledger itself enforces.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from narrative_shift.core.errors import NarrativeShiftError
from narrative_shift.core.ledger import HostLedger

logger = logging.getLogger(__name__)


class PaymentGateway:
    def __init__(self, ledger: HostLedger):
        self._ledger = ledger

    async def transfer(self, session: AsyncSession, from_identity: str, to_identity: str, amount: int) -> None:
        """
        Transfers *amount* units inside the caller's transaction.

        Any failure reported by the ledger is logged and re-raised unchanged.
        """
        try:
            await self._ledger.transfer(session, from_identity, to_identity, amount)
        except NarrativeShiftError as e:
            logger.warning(f"Transfer of {amount} units from {from_identity} to {to_identity} failed: {e}")
            raise
        logger.info(f"Paid {amount} units from {from_identity} to {to_identity}")
