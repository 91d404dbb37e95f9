"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- build_merkle_root: Compute root from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof / process_proof: Check a proof against a root
- TreeBuilder / build_distribution: Grants -> published distribution

Canonical Commitment Rules:
1. Leaf hashing: keccak256(keccak256(abi.encode(address, amount)))
2. Parent hashing: keccak256(sorted(a, b))
3. Odd rule: promote the unpaired last node unchanged
4. Empty tree: rejected
5. Single leaf: root = leaf

Usage:
    from distributor.merkle import build_distribution
    from distributor.schemas import Grant

    distribution = build_distribution([Grant(address=a, amount=25), ...])
    entry = distribution.get_entry(a)
"""
from .merkle_tree import (
    MerkleProof,
    merkle_parent,
    build_merkle_levels,
    build_merkle_root,
    build_merkle_proof,
    build_all_proofs,
    process_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .tree_builder import (
    TreeBuilder,
    build_distribution,
)


__all__ = [
    # Core types
    "MerkleProof",
    # Core functions
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "build_all_proofs",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Builder
    "TreeBuilder",
    "build_distribution",
]
