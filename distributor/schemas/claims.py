"""
Claim Schemas
File: claims.py

Purpose: Claim request/result models and the claim-succeeded event record.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import DistributorError


class ClaimRequest(BaseModel):
    """
    A claim as submitted by a claimant.

    Only the JSON shape is checked here. Address, hex and length rules
    are enforced by the verifier and reported as MALFORMED_INPUT.
    """

    model_config = ConfigDict(extra="forbid")

    address: str = Field(..., description="Claiming account (hex)")
    amount: int = Field(..., description="Claimed amount")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom-up, 0x-prefixed hex",
    )
    signature: str = Field(..., description="65-byte r||s||v signature, 0x-prefixed hex")


class ClaimResult(BaseModel):
    """Outcome of a claim submission."""

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(..., description="Whether the claim was accepted")
    address: str = Field(..., description="Address as submitted or normalized")
    amount: int = Field(..., description="Amount as submitted")
    error: Optional[DistributorError] = Field(
        default=None,
        description="Rejection reason when ok is false",
    )

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None

    @classmethod
    def accepted(cls, address: str, amount: int) -> "ClaimResult":
        return cls(ok=True, address=address, amount=amount)

    @classmethod
    def rejected(cls, address: str, amount: int, error: DistributorError) -> "ClaimResult":
        return cls(ok=False, address=address, amount=amount, error=error)


class ClaimedEvent(BaseModel):
    """Observable record emitted once per successful claim."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sequence: int = Field(..., description="Position in the verifier's event log", ge=0)
    address: str = Field(..., description="Claiming account")
    amount: int = Field(..., description="Amount transferred", ge=0)
    recorded_at: datetime = Field(..., description="When the claim was committed (UTC)")


__all__ = ["ClaimRequest", "ClaimResult", "ClaimedEvent"]
