"""
SQLAlchemy ORM model for the 'subscriptions' table.
"""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, String

from .base import Base
from .narrative_record_orm import IDENTITY_HEX_LENGTH


class SubscriptionORM(Base):
    """
    SQLAlchemy ORM model representing a paid, time-bounded subscription.

    Attributes:
        handle (str): Primary key, a freshly generated 32-byte hex key.
        subscriber_identity (str): Identity of the paying party.
        start_time (int): Network clock (unix seconds) at creation.
        end_time (int): start_time + duration_days * 86400. Advisory only.
        active (bool): True until the subscriber cancels.
    """
    __tablename__ = "subscriptions"

    handle = Column(String(IDENTITY_HEX_LENGTH), primary_key=True, comment="Storage slot key of the subscription.")
    subscriber_identity = Column(String(IDENTITY_HEX_LENGTH), nullable=False, comment="Identity of the paying party.")
    start_time = Column(BigInteger, nullable=False, comment="Network time at creation.")
    end_time = Column(BigInteger, nullable=False, comment="Advisory expiry time.")
    active = Column(Boolean, nullable=False, default=True, comment="Cleared by cancellation.")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_subscription_window"),
    )

    def __repr__(self) -> str:
        return (
            f"<SubscriptionORM(handle='{self.handle}', subscriber='{self.subscriber_identity}', "
            f"end_time={self.end_time}, active={self.active})>"
        )
