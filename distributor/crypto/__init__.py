"""
Core cryptographic utilities.

Keccak hashing for Merkle commitments and EIP-712 claim signatures.
"""
from .hashing import (
    keccak256,
    encode_grant,
    hash_leaf,
    hash_pair,
    to_hex,
    from_hex,
    digest_from_hex,
)
from .signatures import (
    ClaimDomain,
    ClaimSignature,
    sign_claim,
    recover_claim_signer,
    verify_claim_signature,
)

__all__ = [
    "keccak256",
    "encode_grant",
    "hash_leaf",
    "hash_pair",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "ClaimDomain",
    "ClaimSignature",
    "sign_claim",
    "recover_claim_signer",
    "verify_claim_signature",
]
