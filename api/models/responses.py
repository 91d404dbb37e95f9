"""
API Response Models

Pydantic models for API response serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-distributor-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Published configuration of the distributor."""

    ok: bool = True
    merkle_root: str = Field(..., description="Committed Merkle root")
    leaf_count: int = Field(..., description="Number of grants in the tree")
    token_total: str = Field(..., description="Sum of all grants (decimal string)")
    domain_name: str = Field(..., description="EIP-712 domain name")
    domain_version: str = Field(..., description="EIP-712 domain version")
    chain_id: int = Field(..., description="Chain id bound into claim signatures")
    verifying_contract: str = Field(..., description="Contract address bound into claim signatures")


class ProofResponse(BaseModel):
    """Proof record for one address."""

    ok: bool = True
    address: str
    amount: str = Field(..., description="Granted amount (decimal string)")
    index: int = Field(..., description="Leaf index in the whitelist")
    proof: list[str] = Field(default_factory=list, description="Sibling digests, bottom-up")
    merkle_root: str
    claimed: bool = Field(default=False, description="Whether the grant has been redeemed")


class ClaimStatusResponse(BaseModel):
    """Claimed flag for one address."""

    ok: bool = True
    address: str
    claimed: bool


class ClaimEventInfo(BaseModel):
    """Serialized claim-succeeded record."""

    sequence: int
    address: str
    amount: str
    recorded_at: datetime


class ClaimEventsResponse(BaseModel):
    """Response for GET /claims."""

    ok: bool = True
    count: int = 0
    events: list[ClaimEventInfo] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error detail in response."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
