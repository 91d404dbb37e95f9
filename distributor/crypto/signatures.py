"""
Claim Authorization Signatures
EIP-712 typed-data signatures binding one (account, amount) claim.

The Merkle proof shows a grant is in the committed set; the signature
shows the claim request itself was authorized by the account's key.
Signatures are domain-separated by contract identity and chain id so
they cannot be replayed against another distributor.

Typed data:
    EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)
    Claim(address account,uint256 amount)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_keys.exceptions import BadSignature, ValidationError as KeyValidationError
from eth_utils import to_checksum_address


SIGNATURE_SIZE = 65
CLAIM_PRIMARY_TYPE = "Claim"

CLAIM_TYPES: dict[str, list[dict[str, str]]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "Claim": [
        {"name": "account", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ],
}


@dataclass(frozen=True)
class ClaimDomain:
    """Domain-separation parameters for claim signatures."""
    name: str
    version: str
    chain_id: int
    verifying_contract: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": to_checksum_address(self.verifying_contract),
        }


@dataclass(frozen=True)
class ClaimSignature:
    """A produced claim signature together with the account that made it."""
    signer: str
    signature: bytes

    @property
    def signature_hex(self) -> str:
        return "0x" + self.signature.hex()


def build_claim_typed_data(domain: ClaimDomain, account: str, amount: int) -> dict[str, Any]:
    """Full EIP-712 message for a claim."""
    return {
        "types": CLAIM_TYPES,
        "primaryType": CLAIM_PRIMARY_TYPE,
        "domain": domain.to_dict(),
        "message": {
            "account": to_checksum_address(account),
            "amount": amount,
        },
    }


def encode_claim(domain: ClaimDomain, account: str, amount: int) -> SignableMessage:
    """Encode a claim as an EIP-712 signable message."""
    return encode_typed_data(full_message=build_claim_typed_data(domain, account, amount))


def sign_claim(
    private_key: str | bytes,
    domain: ClaimDomain,
    account: str,
    amount: int,
) -> ClaimSignature:
    """
    Sign a claim for account/amount with a private key.

    The key normally belongs to `account`; signing for another account
    produces a signature the verifier will reject.
    """
    signed = Account.sign_message(encode_claim(domain, account, amount), private_key=private_key)
    signer = Account.from_key(private_key).address
    return ClaimSignature(signer=signer, signature=bytes(signed.signature))


def recover_claim_signer(
    domain: ClaimDomain,
    account: str,
    amount: int,
    signature: bytes,
) -> str:
    """
    Recover the checksum address that signed this claim.

    Raises:
        ValueError: If the signature has the wrong size
        BadSignature: If no public key can be recovered
    """
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}")
    return Account.recover_message(encode_claim(domain, account, amount), signature=signature)


def verify_claim_signature(
    domain: ClaimDomain,
    account: str,
    amount: int,
    signature: bytes,
) -> bool:
    """
    Check that `signature` authorizes exactly (account, amount) under `domain`
    and was produced by `account`'s key.

    Returns:
        True if valid, False otherwise
    """
    try:
        signer = recover_claim_signer(domain, account, amount, signature)
    except (ValueError, BadSignature, KeyValidationError):
        return False
    return signer == to_checksum_address(account)


__all__ = [
    "SIGNATURE_SIZE",
    "CLAIM_TYPES",
    "ClaimDomain",
    "ClaimSignature",
    "build_claim_typed_data",
    "encode_claim",
    "sign_claim",
    "recover_claim_signer",
    "verify_claim_signature",
]
