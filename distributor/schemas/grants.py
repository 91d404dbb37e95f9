"""
Grant Schemas
File: grants.py

Purpose: The (address, amount) grant committed to by a Merkle root.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from eth_utils import is_address, to_checksum_address

from distributor.crypto.hashing import UINT256_MAX, hash_leaf


def normalize_address(value: str) -> str:
    """
    Validate a 20-byte hex address and return its EIP-55 checksum form.

    Raises:
        ValueError: If the value is not a 0x- (or 0X-) prefixed 40 hex
            character address. Unprefixed hex is rejected.
    """
    if not isinstance(value, str):
        raise ValueError(f"Address must be a hex string, got {type(value).__name__}")
    candidate = value.strip()
    if candidate[:2] not in ("0x", "0X"):
        raise ValueError(f"Invalid address: {value!r}")
    candidate = "0x" + candidate[2:]
    if not is_address(candidate.lower()):
        raise ValueError(f"Invalid address: {value!r}")
    return to_checksum_address(candidate)


class Grant(BaseModel):
    """
    A single atomic token grant.

    Immutable once included in a published tree. At most one grant per
    address may appear in a tree.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Recipient account (EIP-55 checksum)")
    amount: int = Field(
        ...,
        description="Grant amount in token base units",
        ge=0,
        le=UINT256_MAX,
    )

    @field_validator("address", mode="before")
    @classmethod
    def _checksum_address(cls, value: str) -> str:
        return normalize_address(value)

    def leaf(self) -> bytes:
        """Double-hashed leaf digest for this grant."""
        return hash_leaf(self.address, self.amount)


__all__ = ["Grant", "normalize_address"]
