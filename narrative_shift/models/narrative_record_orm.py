"""
SQLAlchemy ORM model for the 'narrative_records' table.
"""

from sqlalchemy import BigInteger, CheckConstraint, Column, SmallInteger, String

from .base import Base

# Fixed layout bounds of a narrative record account
MAX_TEXT_BYTES = 20
IDENTITY_HEX_LENGTH = 64


class NarrativeRecordORM(Base):
    """
    SQLAlchemy ORM model representing one narrative-shift assessment.

    Rows are written once and never updated or deleted.

    Attributes:
        handle (str): Primary key, a freshly generated 32-byte hex key.
        score (int): Scaled probability in [0, 100].
        platform (str): Platform the narrative moves away from (at most 20 bytes).
        alternative (str): Platform the narrative moves towards (at most 20 bytes).
        timestamp (int): Caller-supplied signed 64-bit time value.
        author_identity (str): Identity of the signer that created the record.
    """
    __tablename__ = "narrative_records"

    handle = Column(String(IDENTITY_HEX_LENGTH), primary_key=True, comment="Storage slot key of the record.")
    score = Column(SmallInteger, nullable=False, comment="Scaled probability, 0-100.")
    platform = Column(String(MAX_TEXT_BYTES), nullable=False, comment="Source platform name.")
    alternative = Column(String(MAX_TEXT_BYTES), nullable=False, comment="Alternative platform name.")
    timestamp = Column(BigInteger, nullable=False, comment="Caller-supplied time value.")
    author_identity = Column(String(IDENTITY_HEX_LENGTH), nullable=False, comment="Identity that authored the record.")

    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 100", name="ck_narrative_record_score_range"),
    )

    def __repr__(self) -> str:
        return (
            f"<NarrativeRecordORM(handle='{self.handle}', platform='{self.platform}', "
            f"alternative='{self.alternative}', score={self.score})>"
        )
