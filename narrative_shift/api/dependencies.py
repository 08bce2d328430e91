"""
Shared FastAPI dependencies for the NarrativeShift API.
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from narrative_shift.config.settings import Settings, settings
from narrative_shift.core import HostLedger, RecordStore, SubscriptionManager
from narrative_shift.core.errors import NarrativeShiftError
from narrative_shift.core.identity import normalize_identity

SIGNER_HEADER = "X-Signer-Identity"


@lru_cache
def get_host_ledger() -> HostLedger:
    """Process-wide ledger bound to the configured database."""
    return HostLedger()


def get_settings() -> Settings:
    return settings


async def get_signer_identity(
    signer: str = Header(..., alias=SIGNER_HEADER, description="Identity authorizing the operation."),
) -> str:
    try:
        return normalize_identity(signer)
    except NarrativeShiftError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


async def get_record_store(ledger: HostLedger = Depends(get_host_ledger)) -> RecordStore:
    return RecordStore(ledger)


async def get_subscription_manager(
    ledger: HostLedger = Depends(get_host_ledger),
    config: Settings = Depends(get_settings),
) -> SubscriptionManager:
    return SubscriptionManager(ledger, config=config)
