"""
SQLAlchemy ORM model for the 'ledger_balances' table.
"""

from sqlalchemy import BigInteger, CheckConstraint, Column, String

from .base import Base
from .narrative_record_orm import IDENTITY_HEX_LENGTH


class LedgerBalanceORM(Base):
    """
    Native-currency balance held by one identity on the host ledger.

    Attributes:
        identity (str): Primary key, the 32-byte hex identity.
        balance (int): Smallest units of native currency, never negative.
    """
    __tablename__ = "ledger_balances"

    identity = Column(String(IDENTITY_HEX_LENGTH), primary_key=True, comment="Owning identity.")
    balance = Column(BigInteger, nullable=False, default=0, comment="Native units held.")

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_ledger_balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<LedgerBalanceORM(identity='{self.identity}', balance={self.balance})>"
