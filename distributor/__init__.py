"""
Merkle distributor.

Commit to a whitelist of (address, amount) grants with one Merkle root,
then let each address redeem its grant exactly once with a proof and an
EIP-712 authorization signature.
"""

__version__ = "0.1.0"
