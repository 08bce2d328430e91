"""
Models package for the NarrativeShift service.

This package contains SQLAlchemy ORM models and Pydantic DTOs.
"""

# Ensure all ORM models are registered with the Base metadata when this package is imported.
from . import base
from . import ledger_balance_orm
from . import narrative_record_orm
from . import subscription_orm

# Import Base and ORM models for easy access
from .base import Base
from .ledger_balance_orm import LedgerBalanceORM
from .narrative_record_orm import NarrativeRecordORM
from .subscription_orm import SubscriptionORM

# Import DTOs for easy access
from .dtos import (
    AirdropRequest,
    BalanceDTO,
    CreateRecordRequest,
    NarrativeRecordDTO,
    SubscribeRequest,
    SubscriptionDTO,
)

# Define what is exported with 'from narrative_shift.models import *'
__all__ = [
    # Base
    "Base",
    # ORMs
    "LedgerBalanceORM",
    "NarrativeRecordORM",
    "SubscriptionORM",
    # DTOs
    "AirdropRequest",
    "BalanceDTO",
    "CreateRecordRequest",
    "NarrativeRecordDTO",
    "SubscribeRequest",
    "SubscriptionDTO",
]
