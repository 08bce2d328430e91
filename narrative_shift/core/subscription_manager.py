"""
Subscription manager component for the NarrativeShift service.

Owns the pricing tiers and the time window of subscriptions. Creating a
subscription charges the subscriber through the PaymentGateway and persists
the subscription in the same transaction, so a failed payment leaves nothing
behind. Cancelling clears the ``active`` flag; whether the unused time is
refunded is decided by ``CANCELLATION_REFUND_POLICY``. Under the prorated
policy every payment goes to the configured treasury, which is the account
refunds are drawn from.

``end_time`` is recorded but never enforced.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy import select

from narrative_shift.config.settings import RefundPolicy, Settings, settings as default_settings
from narrative_shift.core.errors import (
    AccountNotFoundError,
    InvalidDurationError,
    InvalidTreasuryError,
    UnauthorizedError,
)
from narrative_shift.core.identity import new_handle, normalize_handle, normalize_identity
from narrative_shift.core.ledger import HostLedger
from narrative_shift.core.payment_gateway import PaymentGateway
from narrative_shift.models import SubscriptionDTO, SubscriptionORM
from narrative_shift.models.dtos import U16_MAX

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def price_for_duration(duration_days: int, config: Settings = default_settings) -> int:
    """Tier A up to and including the boundary day count, tier B above it."""
    if duration_days <= config.TIER_BOUNDARY_DAYS:
        return config.TIER_A_PRICE
    return config.TIER_B_PRICE


def subscription_window(start_time: int, duration_days: int) -> Tuple[int, int]:
    return start_time, start_time + duration_days * SECONDS_PER_DAY


def prorated_refund(subscription: SubscriptionORM, now: int, price: int) -> int:
    """Share of *price* covering the time left before end_time, rounded down."""
    total = subscription.end_time - subscription.start_time
    remaining = max(0, min(subscription.end_time - now, total))
    return price * remaining // total


class SubscriptionManager:
    """
    Creates and cancels paid subscriptions.
    """
    def __init__(
        self,
        ledger: HostLedger,
        payment_gateway: Optional[PaymentGateway] = None,
        config: Settings = default_settings,
    ):
        """
        Initializes the SubscriptionManager.

        Args:
            ledger: Host ledger providing transactions and the clock.
            payment_gateway: Gateway used to charge subscribers. Defaults to
                             one backed by *ledger*.
            config: Settings supplying tier prices, treasury and refund policy.
        """
        self._ledger = ledger
        self._payments = payment_gateway or PaymentGateway(ledger)
        self._config = config

    @property
    def treasury_identity(self) -> str:
        return normalize_identity(self._config.TREASURY_IDENTITY)

    @property
    def _refunds_prorated(self) -> bool:
        return self._config.CANCELLATION_REFUND_POLICY == RefundPolicy.PRORATED

    async def subscribe(
        self,
        subscriber_identity: str,
        duration_days: int,
        treasury_identity: Optional[str] = None,
    ) -> SubscriptionDTO:
        """
        Charges the tier price and opens a subscription.

        Args:
            subscriber_identity: The signer paying for the subscription.
            duration_days: Positive number of days, at most 65535.
            treasury_identity: Recipient of the payment. Defaults to the
                               configured treasury.

        Returns:
            The new, active subscription.

        Raises:
            InvalidDurationError: If duration_days is not in [1, 65535].
            InvalidTreasuryError: If another treasury is named while refunds
                                  are prorated.
            InsufficientFundsError: If the subscriber cannot pay the price.
        """
        subscriber_identity = normalize_identity(subscriber_identity)
        treasury = normalize_identity(treasury_identity) if treasury_identity else self.treasury_identity
        if (
            not isinstance(duration_days, int)
            or isinstance(duration_days, bool)
            or not 1 <= duration_days <= U16_MAX
        ):
            raise InvalidDurationError()
        if self._refunds_prorated and treasury != self.treasury_identity:
            raise InvalidTreasuryError()

        price = price_for_duration(duration_days, self._config)

        async with self._ledger.transaction() as session:
            start_time, end_time = subscription_window(self._ledger.unix_timestamp(), duration_days)

            await self._payments.transfer(session, subscriber_identity, treasury, price)

            subscription = SubscriptionORM(
                handle=new_handle(),
                subscriber_identity=subscriber_identity,
                start_time=start_time,
                end_time=end_time,
                active=True,
            )
            session.add(subscription)
            await session.flush()
            created = SubscriptionDTO.model_validate(subscription)

        logger.info(f"Subscription created for {duration_days} days")
        return created

    async def cancel_subscription(self, subscription_handle: str, caller_identity: str) -> SubscriptionDTO:
        """
        Deactivates a subscription on behalf of its subscriber.

        Cancelling an already cancelled subscription succeeds without
        changing anything.

        Raises:
            AccountNotFoundError: If no subscription has this handle.
            UnauthorizedError: If the caller is not the subscriber.
        """
        caller_identity = normalize_identity(caller_identity)
        subscription_handle = normalize_handle("Subscription", subscription_handle)

        async with self._ledger.transaction() as session:
            result = await session.execute(
                select(SubscriptionORM)
                .where(SubscriptionORM.handle == subscription_handle)
                .with_for_update()
            )
            subscription = result.scalars().first()
            if subscription is None:
                raise AccountNotFoundError("Subscription", subscription_handle)
            if subscription.subscriber_identity != caller_identity:
                raise UnauthorizedError()

            if not subscription.active:
                logger.info(f"Subscription {subscription_handle} already cancelled")
                return SubscriptionDTO.model_validate(subscription)

            subscription.active = False

            if self._refunds_prorated:
                await self._refund_unused_time(session, subscription)

            await session.flush()
            cancelled = SubscriptionDTO.model_validate(subscription)

        logger.info("Subscription cancelled")
        return cancelled

    async def _refund_unused_time(self, session, subscription: SubscriptionORM) -> None:
        duration_days = (subscription.end_time - subscription.start_time) // SECONDS_PER_DAY
        price = price_for_duration(duration_days, self._config)
        refund = prorated_refund(subscription, self._ledger.unix_timestamp(), price)
        if refund == 0:
            return

        treasury = self.treasury_identity
        available = await self._ledger.balance_of(session, treasury, for_update=True)
        if available < refund:
            logger.warning(
                f"Treasury {treasury} holds {available} units, refund of {refund} "
                f"for subscription {subscription.handle} reduced"
            )
            refund = available
            if refund == 0:
                return

        await self._payments.transfer(session, treasury, subscription.subscriber_identity, refund)
        logger.info(f"Refunded {refund} units to {subscription.subscriber_identity}")

    async def get_subscription(self, handle: str) -> SubscriptionDTO:
        handle = normalize_handle("Subscription", handle)
        async with self._ledger.transaction() as session:
            result = await session.execute(
                select(SubscriptionORM).where(SubscriptionORM.handle == handle)
            )
            subscription = result.scalars().first()
            if subscription is None:
                raise AccountNotFoundError("Subscription", handle)
            return SubscriptionDTO.model_validate(subscription)
