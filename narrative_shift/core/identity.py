"""
Identities and storage handles.

Both are 32-byte values rendered as 64 lowercase hex characters.
"""

import re
import secrets

from narrative_shift.core.errors import AccountNotFoundError, InvalidIdentityError

IDENTITY_BYTES = 32
_IDENTITY_RE = re.compile(r"^[0-9a-f]{%d}$" % (IDENTITY_BYTES * 2))


def _canonical(value) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def normalize_identity(value: str) -> str:
    """Return *value* stripped and lower-cased, or raise InvalidIdentityError."""
    candidate = _canonical(value)
    if not _IDENTITY_RE.match(candidate):
        raise InvalidIdentityError(f"Invalid identity: {value!r}")
    return candidate


def normalize_handle(kind: str, value: str) -> str:
    """
    Canonical form of a storage handle used for lookups.

    A value that cannot be a handle names no account, so it is reported as
    AccountNotFoundError for *kind*.
    """
    candidate = _canonical(value)
    if not _IDENTITY_RE.match(candidate):
        raise AccountNotFoundError(kind, str(value))
    return candidate


def new_handle() -> str:
    """Key for a freshly allocated storage slot."""
    return secrets.token_hex(IDENTITY_BYTES)
