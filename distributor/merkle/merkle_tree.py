"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic Merkle root computation over pre-hashed leaves
- Merkle proof generation for any leaf index
- Position-free proof verification (sorted pairs)

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(keccak256(abi.encode(address, amount)))
   - Implemented via distributor.crypto.hashing.hash_leaf()
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
3. Odd rule: an unpaired trailing node is promoted unchanged to the next level
4. Empty leaves: rejected, no root is defined for zero grants
5. Single leaf: root = leaf, proof is empty

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is defined by the caller (whitelist order)
- This module never sorts leaves - only sibling pairs
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from distributor.crypto.hashing import hash_pair
from distributor.schemas.errors import EmptyTreeException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Children are sorted before hashing, so merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_pair(left, right)


def _next_level(level: Sequence[bytes]) -> list[bytes]:
    nxt: list[bytes] = []
    for i in range(0, len(level) - 1, 2):
        nxt.append(merkle_parent(level[i], level[i + 1]))
    if len(level) % 2 == 1:
        # Promote the unpaired node as-is
        nxt.append(level[-1])
    return nxt


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first, root last.

    Example: [a, b, c] -> [[a, b, c], [parent(a,b), c], [parent(parent(a,b), c)]]

    Raises:
        EmptyTreeException: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyTreeException()

    levels: list[list[bytes]] = [list(leaves)]
    while len(levels[-1]) > 1:
        levels.append(_next_level(levels[-1]))
        logger.debug("Built tree level %d with %d nodes", len(levels) - 1, len(levels[-1]))
    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Args:
        leaves: Sequence of 32-byte leaf hashes. Order matters and is preserved.

    Returns:
        32-byte Merkle root

    Raises:
        EmptyTreeException: If leaves is empty
    """
    return build_merkle_levels(leaves)[-1][0]


def _proof_from_levels(levels: list[list[bytes]], index: int) -> list[bytes]:
    siblings: list[bytes] = []
    current_index = index
    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        # A promoted node has no sibling at this level
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        current_index //= 2
    return siblings


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Args:
        leaves: Sequence of leaf hashes
        index: 0-based index of the leaf to prove

    Returns:
        MerkleProof with leaf, index, siblings (bottom-up), and root

    Raises:
        IndexError: If index is out of range
        EmptyTreeException: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyTreeException("Cannot generate proof for empty leaf list")

    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    levels = build_merkle_levels(leaves)
    return MerkleProof(
        leaf=leaves[index],
        index=index,
        siblings=_proof_from_levels(levels, index),
        root=levels[-1][0],
    )


def build_all_proofs(leaves: Sequence[bytes]) -> list[MerkleProof]:
    """Generate proofs for every leaf while building the tree only once."""
    levels = build_merkle_levels(leaves)
    root = levels[-1][0]
    return [
        MerkleProof(
            leaf=leaf,
            index=i,
            siblings=_proof_from_levels(levels, i),
            root=root,
        )
        for i, leaf in enumerate(leaves)
    ]


def process_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """
    Rebuild the root implied by a leaf and its sibling path.

    The leaf's position is not needed: each step hashes the sorted pair.
    """
    current_hash = leaf
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, sibling)
    return current_hash


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against the root it carries.

    Returns:
        True if the proof is valid, False otherwise
    """
    return process_proof(proof.leaf, proof.siblings) == proof.root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels above the leaves, i.e. the longest possible proof.

    Returns:
        0 for a single leaf (or empty tree), ceil(log2(n)) otherwise
    """
    depth = 0
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "MerkleProof",
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "build_all_proofs",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
