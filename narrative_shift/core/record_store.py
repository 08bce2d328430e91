"""
Record store component for the NarrativeShift service.

Creates and persists narrative-shift records. A record is written once, in a
single atomic step, and there is no update or delete path; the only read is a
direct lookup by handle.
"""
import logging

from sqlalchemy import select

from narrative_shift.core.errors import (
    AccountNotFoundError,
    AlternativeTooLongError,
    InvalidScoreError,
    InvalidTimestampError,
    PlatformTooLongError,
)
from narrative_shift.core.identity import new_handle, normalize_handle, normalize_identity
from narrative_shift.core.ledger import HostLedger
from narrative_shift.models import NarrativeRecordDTO, NarrativeRecordORM
from narrative_shift.models.dtos import I64_MAX, I64_MIN
from narrative_shift.models.narrative_record_orm import MAX_TEXT_BYTES

logger = logging.getLogger(__name__)

MAX_SCORE = 100


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_record_fields(score: int, platform: str, alternative: str, timestamp: int) -> None:
    """
    Checks the bounds of a record's fields.

    Booleans are not accepted as numbers.

    Raises:
        InvalidScoreError: If score is not an integer in [0, 100].
        PlatformTooLongError: If platform is not text or exceeds 20 UTF-8 bytes.
        AlternativeTooLongError: If alternative is not text or exceeds 20 UTF-8 bytes.
        InvalidTimestampError: If timestamp does not fit in 64 signed bits.
    """
    if not _is_integer(score) or not 0 <= score <= MAX_SCORE:
        raise InvalidScoreError()
    if not isinstance(platform, str):
        raise PlatformTooLongError("Platform name must be a string")
    if len(platform.encode("utf-8")) > MAX_TEXT_BYTES:
        raise PlatformTooLongError()
    if not isinstance(alternative, str):
        raise AlternativeTooLongError("Alternative name must be a string")
    if len(alternative.encode("utf-8")) > MAX_TEXT_BYTES:
        raise AlternativeTooLongError()
    if not _is_integer(timestamp) or not I64_MIN <= timestamp <= I64_MAX:
        raise InvalidTimestampError()


class RecordStore:
    """
    Stores immutable narrative records authored by a signer.
    """
    def __init__(self, ledger: HostLedger):
        self._ledger = ledger

    async def create_record(
        self,
        score: int,
        platform: str,
        alternative: str,
        timestamp: int,
        author_identity: str,
    ) -> NarrativeRecordDTO:
        """
        Allocates a new record slot and writes all fields.

        Args:
            score: Scaled probability in [0, 100].
            platform: Platform the narrative moves away from.
            alternative: Platform the narrative moves towards.
            timestamp: Caller-supplied time value.
            author_identity: The signer creating the record.

        Returns:
            The stored record, including its new handle.
        """
        author_identity = normalize_identity(author_identity)
        validate_record_fields(score, platform, alternative, timestamp)

        async with self._ledger.transaction() as session:
            record = NarrativeRecordORM(
                handle=new_handle(),
                score=score,
                platform=platform,
                alternative=alternative,
                timestamp=timestamp,
                author_identity=author_identity,
            )
            session.add(record)
            await session.flush()
            stored = NarrativeRecordDTO.model_validate(record)

        logger.info(f"Narrative stored: {platform} -> {alternative} (score: {score})")
        return stored

    async def get_record(self, handle: str) -> NarrativeRecordDTO:
        handle = normalize_handle("NarrativeRecord", handle)
        async with self._ledger.transaction() as session:
            result = await session.execute(
                select(NarrativeRecordORM).where(NarrativeRecordORM.handle == handle)
            )
            record = result.scalars().first()
            if record is None:
                raise AccountNotFoundError("NarrativeRecord", handle)
            return NarrativeRecordDTO.model_validate(record)
