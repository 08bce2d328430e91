"""
Narrative record API endpoints.

Records are created once and read back by handle; there is no listing,
filtering or update endpoint.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from narrative_shift.api.dependencies import get_record_store, get_signer_identity
from narrative_shift.core import RecordStore
from narrative_shift.core.errors import NarrativeShiftError
from narrative_shift.models.dtos import CreateRecordRequest, NarrativeRecordDTO

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=NarrativeRecordDTO, status_code=201)
async def create_record(
    request: CreateRecordRequest,
    signer: str = Depends(get_signer_identity),
    store: RecordStore = Depends(get_record_store),
) -> NarrativeRecordDTO:
    """
    Store a narrative record authored by the signer.

    Raises:
        HTTPException: 400 with the error kind if a field is out of bounds.
    """
    try:
        return await store.create_record(
            score=request.score,
            platform=request.platform,
            alternative=request.alternative,
            timestamp=request.timestamp,
            author_identity=signer,
        )
    except NarrativeShiftError as e:
        logger.info(f"Rejected record from {signer}: {e.code}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get("/{handle}", response_model=NarrativeRecordDTO)
async def get_record(
    handle: str,
    store: RecordStore = Depends(get_record_store),
) -> NarrativeRecordDTO:
    try:
        return await store.get_record(handle)
    except NarrativeShiftError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
