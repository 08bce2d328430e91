"""
NarrativeShift service: immutable narrative-shift records and paid,
time-bounded subscriptions on a shared transactional ledger.
"""

__version__ = "0.1.0"
