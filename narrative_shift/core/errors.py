"""
Error kinds raised by the NarrativeShift components.

Every failure is reported to the caller as one of these exceptions; the
transaction it was raised in is rolled back as a whole. Each kind carries a
stable ``code`` (the name callers match on), a human-readable message and the
HTTP status the API layer answers with.
"""

from typing import Any, Dict, Optional


class NarrativeShiftError(Exception):
    """Base class for all domain errors of the service."""

    code: str = "NarrativeShiftError"
    message: str = "Operation rejected"
    status_code: int = 400

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_detail(self) -> Dict[str, Any]:
        """Body used for the API error response."""
        return {"error": self.code, "message": self.message}


# --- Input validation ---

class InvalidScoreError(NarrativeShiftError):
    code = "InvalidScore"
    message = "Invalid score, must be 0-100"


class PlatformTooLongError(NarrativeShiftError):
    code = "PlatformTooLong"
    message = "Platform name too long"


class AlternativeTooLongError(NarrativeShiftError):
    code = "AlternativeTooLong"
    message = "Alternative name too long"


class InvalidTimestampError(NarrativeShiftError):
    code = "InvalidTimestamp"
    message = "Timestamp must fit in a signed 64-bit integer"


class InvalidDurationError(NarrativeShiftError):
    code = "InvalidDuration"
    message = "Duration must be between 1 and 65535 days"


class InvalidIdentityError(NarrativeShiftError):
    code = "InvalidIdentity"
    message = "Identity must be 32 bytes encoded as 64 hex characters"


class InvalidTreasuryError(NarrativeShiftError):
    code = "InvalidTreasury"
    message = "Refunding subscriptions must be paid to the configured treasury"


class SubscriptionExpiredError(NarrativeShiftError):
    """Reserved. Expiry is advisory and no operation raises this yet."""
    code = "SubscriptionExpired"
    message = "Subscription expired"


# --- Authorization and lookup ---

class UnauthorizedError(NarrativeShiftError):
    code = "Unauthorized"
    message = "Caller does not own this account"
    status_code = 403


class AccountNotFoundError(NarrativeShiftError):
    code = "AccountNotFound"
    message = "Account not found"
    status_code = 404

    def __init__(self, kind: str, handle: str):
        self.kind = kind
        self.handle = handle
        super().__init__(f"{kind} {handle} not found")


# --- Host ledger transfer failures ---

class InsufficientFundsError(NarrativeShiftError):
    code = "InsufficientFunds"
    status_code = 402

    def __init__(self, identity: str, required: int, available: int):
        self.identity = identity
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient funds in {identity}: required {required}, available {available}"
        )


class InvalidTransferAmountError(NarrativeShiftError):
    code = "InvalidTransferAmount"
    message = "Transfer amount must be a non-negative integer"
