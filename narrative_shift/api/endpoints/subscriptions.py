"""
Subscription API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from narrative_shift.api.dependencies import get_signer_identity, get_subscription_manager
from narrative_shift.core import SubscriptionManager
from narrative_shift.core.errors import NarrativeShiftError
from narrative_shift.models.dtos import SubscribeRequest, SubscriptionDTO

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=SubscriptionDTO, status_code=201)
async def subscribe(
    request: SubscribeRequest,
    signer: str = Depends(get_signer_identity),
    manager: SubscriptionManager = Depends(get_subscription_manager),
) -> SubscriptionDTO:
    """
    Pay for and open a subscription for the signer.

    Raises:
        HTTPException: 400 for an invalid duration or treasury, 402 if the signer
                       cannot pay.
    """
    try:
        return await manager.subscribe(
            subscriber_identity=signer,
            duration_days=request.duration_days,
            treasury_identity=request.treasury_identity,
        )
    except NarrativeShiftError as e:
        logger.info(f"Rejected subscription for {signer}: {e.code}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post("/{handle}/cancel", response_model=SubscriptionDTO)
async def cancel_subscription(
    handle: str,
    signer: str = Depends(get_signer_identity),
    manager: SubscriptionManager = Depends(get_subscription_manager),
) -> SubscriptionDTO:
    """
    Cancel a subscription. Only its subscriber may do so.

    Raises:
        HTTPException: 403 if the signer is not the subscriber, 404 if unknown.
    """
    try:
        return await manager.cancel_subscription(handle, caller_identity=signer)
    except NarrativeShiftError as e:
        logger.info(f"Rejected cancellation of {handle} by {signer}: {e.code}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get("/{handle}", response_model=SubscriptionDTO)
async def get_subscription(
    handle: str,
    manager: SubscriptionManager = Depends(get_subscription_manager),
) -> SubscriptionDTO:
    try:
        return await manager.get_subscription(handle)
    except NarrativeShiftError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
