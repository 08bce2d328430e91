"""
Pydantic Data Transfer Objects (DTOs) for the NarrativeShift service.

Request models carry the wire-level integer widths (u8 score, u16 duration,
i64 timestamp); the business bounds are enforced by the core components so
that they surface as the service's own error kinds.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

U8_MAX = 2**8 - 1
U16_MAX = 2**16 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class CreateRecordRequest(BaseModel):
    """
    Request model for storing a narrative record. The author is the signer.
    """
    score: int = Field(..., ge=0, le=U8_MAX, description="Scaled probability, 0-100.")
    platform: str = Field(..., description="Platform the narrative moves away from.")
    alternative: str = Field(..., description="Platform the narrative moves towards.")
    timestamp: int = Field(..., ge=I64_MIN, le=I64_MAX, description="Caller-supplied time value.")


class NarrativeRecordDTO(BaseModel):
    """
    DTO for a stored narrative record.

    Mirrors NarrativeRecordORM.
    """
    handle: str
    score: int
    platform: str
    alternative: str
    timestamp: int
    author_identity: str

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def probability(self) -> float:
        """The score scaled back to 0.0-1.0."""
        return self.score / 100


class SubscribeRequest(BaseModel):
    """
    Request model for purchasing a subscription. The subscriber is the signer.
    """
    duration_days: int = Field(..., ge=0, le=U16_MAX, description="Length of the subscription in days.")
    treasury_identity: Optional[str] = Field(None, description="Payment recipient; the configured treasury when omitted.")


class SubscriptionDTO(BaseModel):
    """
    DTO for a subscription.

    Mirrors SubscriptionORM.
    """
    handle: str
    subscriber_identity: str
    start_time: int
    end_time: int
    active: bool

    model_config = {"from_attributes": True}


class BalanceDTO(BaseModel):
    """
    Native-currency balance of one identity.
    """
    identity: str
    balance: int

    model_config = {"from_attributes": True}


class AirdropRequest(BaseModel):
    """
    Request model for minting native units to an identity.
    """
    identity: str
    amount: int = Field(..., gt=0, le=I64_MAX)
