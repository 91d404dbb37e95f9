"""
Distribution Schemas
File: distribution.py

Purpose: The published output of a tree build: the root plus one proof
record per grant. This is the document handed to the proof-lookup
service and to claimants.

Document layout (JSON):
    {
      "merkleRoot": "0x...",
      "tokenTotal": "100",
      "leafCount": 4,
      "claims": {
        "0xAbC...": {"index": 0, "amount": "25", "leaf": "0x...", "proof": ["0x...", ...]}
      }
    }

Amounts are decimal strings so uint256 values survive JSON consumers
that only support doubles. Proof order is preserved exactly.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import DistributionFormatException
from .grants import normalize_address


class DistributionEntry(BaseModel):
    """Proof record for a single grant."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Recipient account (EIP-55 checksum)")
    amount: int = Field(..., description="Grant amount", ge=0)
    leaf_index: int = Field(..., description="Position of the grant in the input list", ge=0)
    leaf: str = Field(..., description="Leaf digest, 0x-prefixed hex")
    proof: list[str] = Field(default_factory=list, description="Sibling digests, bottom-up")


class MerkleDistribution(BaseModel):
    """Root digest plus every grant's proof record."""

    model_config = ConfigDict(extra="forbid")

    root: str = Field(..., description="Merkle root, 0x-prefixed hex")
    token_total: int = Field(..., description="Sum of all grant amounts", ge=0)
    entries: list[DistributionEntry] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_consistency(self) -> "MerkleDistribution":
        seen: set[str] = set()
        for entry in self.entries:
            if entry.address in seen:
                raise ValueError(f"Duplicate address in distribution: {entry.address}")
            seen.add(entry.address)
        total = sum(entry.amount for entry in self.entries)
        if total != self.token_total:
            raise ValueError(f"token_total {self.token_total} does not match sum of amounts {total}")
        return self

    @property
    def leaf_count(self) -> int:
        return len(self.entries)

    def get_entry(self, address: str) -> Optional[DistributionEntry]:
        """Look up the proof record for an address (any hex case)."""
        try:
            checksum = normalize_address(address)
        except ValueError:
            return None
        for entry in self.entries:
            if entry.address == checksum:
                return entry
        return None

    def to_document(self) -> dict[str, Any]:
        """Render the JSON proof-distribution document."""
        return {
            "merkleRoot": self.root,
            "tokenTotal": str(self.token_total),
            "leafCount": self.leaf_count,
            "claims": {
                entry.address: {
                    "index": entry.leaf_index,
                    "amount": str(entry.amount),
                    "leaf": entry.leaf,
                    "proof": list(entry.proof),
                }
                for entry in self.entries
            },
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "MerkleDistribution":
        """
        Parse a proof-distribution document.

        Raises:
            DistributionFormatException: If required keys are missing or inconsistent
        """
        claims = data.get("claims") if isinstance(data, dict) else None
        if not isinstance(claims, dict) or not all(isinstance(r, dict) for r in claims.values()):
            raise DistributionFormatException(
                "Invalid distribution document: claims must map addresses to proof records",
            )
        try:
            entries = [
                DistributionEntry(
                    address=normalize_address(address),
                    amount=int(record["amount"]),
                    leaf_index=int(record["index"]),
                    leaf=record["leaf"],
                    proof=list(record.get("proof", [])),
                )
                for address, record in claims.items()
            ]
            entries.sort(key=lambda e: e.leaf_index)
            distribution = cls(
                root=data["merkleRoot"],
                token_total=int(data["tokenTotal"]),
                entries=entries,
            )
            leaf_count = data.get("leafCount")
            leaf_count = None if leaf_count is None else int(leaf_count)
        except (KeyError, TypeError, ValueError) as e:
            raise DistributionFormatException(
                f"Invalid distribution document: {e}",
            ) from e

        if leaf_count is not None and leaf_count != distribution.leaf_count:
            raise DistributionFormatException(
                f"leafCount {leaf_count} does not match {distribution.leaf_count} claims",
            )
        return distribution


__all__ = ["DistributionEntry", "MerkleDistribution"]
