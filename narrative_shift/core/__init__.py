"""
Core components for the NarrativeShift service.
"""

from .ledger import HostLedger
from .payment_gateway import PaymentGateway
from .record_store import RecordStore
from .subscription_manager import SubscriptionManager

__all__ = [
    "HostLedger",
    "PaymentGateway",
    "RecordStore",
    "SubscriptionManager",
]
