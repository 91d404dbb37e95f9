"""
Hashing Utilities
Keccak-256 hashing, ABI word encoding and hex helpers for Merkle commitments.

This module provides:
- keccak256 hashing for raw bytes
- Grant encoding (abi.encode(address, uint256)) and double-hashed leaves
- Sorted-pair hashing used for internal tree nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Leaves are hashed twice so an internal node can never be replayed as a leaf
- Pairs are sorted as big-endian byte strings before hashing
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak, to_canonical_address


DIGEST_SIZE = 32
ADDRESS_SIZE = 20
UINT256_MAX = 2**256 - 1


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def encode_uint256(value: int) -> bytes:
    """Encode an unsigned integer as a 32-byte big-endian ABI word."""
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value out of uint256 range: {value}")
    return value.to_bytes(32, byteorder="big")


def encode_address(address: str | bytes) -> bytes:
    """Encode an address as a left-padded 32-byte ABI word."""
    raw = to_canonical_address(address)
    return b"\x00" * (32 - ADDRESS_SIZE) + raw


def encode_grant(address: str | bytes, amount: int) -> bytes:
    """
    ABI-encode a grant exactly like abi.encode(address, uint256).

    Returns:
        64 bytes: padded address word followed by the amount word
    """
    return encode_address(address) + encode_uint256(amount)


def hash_leaf(address: str | bytes, amount: int) -> bytes:
    """
    Compute the leaf digest for a grant.

    Rule: leaf = keccak256(keccak256(abi.encode(address, amount)))

    Args:
        address: 20-byte account (hex string or raw bytes)
        amount: Grant amount (uint256)

    Returns:
        32-byte leaf digest
    """
    return keccak256(keccak256(encode_grant(address, amount)))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling digests using the sorted-pair rule.

    parent = keccak256(min(a, b) + max(a, b))

    The result does not depend on argument order.
    """
    if a < b:
        return keccak256(a + b)
    return keccak256(b + a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """Decode a 0x-prefixed hex string that must hold exactly one 32-byte digest."""
    data = from_hex(hex_string)
    if len(data) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(data)}")
    return data


__all__ = [
    "DIGEST_SIZE",
    "ADDRESS_SIZE",
    "UINT256_MAX",
    "keccak256",
    "encode_uint256",
    "encode_address",
    "encode_grant",
    "hash_leaf",
    "hash_pair",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
