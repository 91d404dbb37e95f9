"""
Tree Builder
Turns an ordered whitelist of grants into a published MerkleDistribution.

This module provides class-based and functional interfaces:
- TreeBuilder: Validate grants, build the tree once, emit every proof
- build_distribution: Functional shortcut over TreeBuilder

The build is pure and deterministic: the same grants in the same
order always reproduce the same root and proofs.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from distributor.crypto.hashing import to_hex
from distributor.merkle.merkle_tree import (
    MerkleProof,
    build_all_proofs,
)
from distributor.schemas.distribution import DistributionEntry, MerkleDistribution
from distributor.schemas.errors import DuplicateGrantException, EmptyTreeException
from distributor.schemas.grants import Grant


logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds a Merkle distribution from grants.

    Example:
        >>> builder = TreeBuilder([Grant(address=a, amount=25), Grant(address=b, amount=25)])
        >>> distribution = builder.build()
        >>> distribution.root.startswith("0x")
        True
    """

    def __init__(self, grants: Iterable[Grant]) -> None:
        self._grants: list[Grant] = list(grants)

    @property
    def grants(self) -> list[Grant]:
        return list(self._grants)

    def validate(self) -> None:
        """
        Check the input contract.

        Raises:
            EmptyTreeException: If there are no grants
            DuplicateGrantException: If an address appears more than once
        """
        if not self._grants:
            raise EmptyTreeException()

        positions: dict[str, list[int]] = {}
        for i, grant in enumerate(self._grants):
            positions.setdefault(grant.address, []).append(i)
        for address, indices in positions.items():
            if len(indices) > 1:
                raise DuplicateGrantException(address, indices)

    def leaves(self) -> list[bytes]:
        """Leaf digests in input order."""
        return [grant.leaf() for grant in self._grants]

    def proofs(self) -> list[MerkleProof]:
        """Validate and return one MerkleProof per grant, in input order."""
        self.validate()
        return build_all_proofs(self.leaves())

    def build(self) -> MerkleDistribution:
        """
        Validate, build the tree and package root + proofs.

        Returns:
            MerkleDistribution ready to be published

        Raises:
            EmptyTreeException: If there are no grants
            DuplicateGrantException: If an address appears more than once
        """
        proofs = self.proofs()
        root = proofs[0].root

        entries: list[DistributionEntry] = []
        for grant, proof in zip(self._grants, proofs):
            entries.append(
                DistributionEntry(
                    address=grant.address,
                    amount=grant.amount,
                    leaf_index=proof.index,
                    leaf=to_hex(proof.leaf),
                    proof=[to_hex(s) for s in proof.siblings],
                )
            )

        distribution = MerkleDistribution(
            root=to_hex(root),
            token_total=sum(grant.amount for grant in self._grants),
            entries=entries,
        )
        logger.info(
            "Built Merkle distribution: root=%s leaves=%d total=%d",
            distribution.root,
            distribution.leaf_count,
            distribution.token_total,
        )
        return distribution


def build_distribution(grants: Sequence[Grant]) -> MerkleDistribution:
    """Build a MerkleDistribution for grants (see TreeBuilder.build)."""
    return TreeBuilder(grants).build()


__all__ = ["TreeBuilder", "build_distribution"]
