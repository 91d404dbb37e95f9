"""
CLI Sign Command

Produce the EIP-712 authorization signature for a claim.

Usage:
    DISTRIBUTOR_PRIVATE_KEY=0x... distributor sign 25
    distributor sign 25 --key 0x... --address 0xAbC...

The key is read from --key or DISTRIBUTOR_PRIVATE_KEY. The claiming
address defaults to the key's own address.
"""

from __future__ import annotations

import json
import os
import sys
from argparse import Namespace

from eth_account import Account
from eth_keys.exceptions import ValidationError as KeyValidationError

from distributor.crypto.signatures import sign_claim
from distributor.schemas.grants import normalize_address


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1

PRIVATE_KEY_ENV = "DISTRIBUTOR_PRIVATE_KEY"


def sign_cmd(args: Namespace) -> int:
    """Sign (address, amount) under the configured domain."""
    private_key = args.key or os.getenv(PRIVATE_KEY_ENV)
    if not private_key:
        print(f"Error: provide --key or set {PRIVATE_KEY_ENV}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        signer = Account.from_key(private_key).address
        address = normalize_address(args.address) if args.address else signer
        amount = int(args.amount)
    except (ValueError, KeyValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    domain = args.cli_config.domain.to_claim_domain()
    signed = sign_claim(private_key, domain, address, amount)

    if signed.signer != address:
        print(
            f"Warning: signing key belongs to {signed.signer}, not {address}; "
            "the claim will be rejected",
            file=sys.stderr,
        )

    if args.json:
        print(json.dumps({
            "address": address,
            "amount": str(amount),
            "signer": signed.signer,
            "signature": signed.signature_hex,
            "chainId": domain.chain_id,
            "verifyingContract": domain.verifying_contract,
        }, indent=2))
    else:
        print(signed.signature_hex)
    return EXIT_SUCCESS
