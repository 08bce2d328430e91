"""
Host ledger API endpoints: balance lookup and the optional devnet airdrop.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from narrative_shift.api.dependencies import get_host_ledger, get_settings
from narrative_shift.config.settings import Settings
from narrative_shift.core import HostLedger
from narrative_shift.core.errors import NarrativeShiftError
from narrative_shift.models.dtos import AirdropRequest, BalanceDTO

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/balances/{identity}", response_model=BalanceDTO)
async def get_balance(
    identity: str,
    ledger: HostLedger = Depends(get_host_ledger),
) -> BalanceDTO:
    try:
        async with ledger.transaction() as session:
            balance = await ledger.balance_of(session, identity)
    except NarrativeShiftError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    return BalanceDTO(identity=identity.strip().lower(), balance=balance)


@router.post("/airdrop", response_model=BalanceDTO)
async def airdrop(
    request: AirdropRequest,
    ledger: HostLedger = Depends(get_host_ledger),
    config: Settings = Depends(get_settings),
) -> BalanceDTO:
    """
    Mint native units to an identity. Disabled unless LEDGER_AIRDROP_ENABLED is set.
    """
    if not config.LEDGER_AIRDROP_ENABLED:
        raise HTTPException(status_code=403, detail={"error": "AirdropDisabled", "message": "Airdrop is disabled"})
    try:
        async with ledger.transaction() as session:
            balance = await ledger.credit(session, request.identity, request.amount)
    except NarrativeShiftError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    logger.info(f"Airdropped {request.amount} units to {request.identity}")
    return BalanceDTO(identity=request.identity.strip().lower(), balance=balance)
