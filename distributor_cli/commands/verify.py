"""
CLI Verify Command

Check offline that (address, amount, proof) reproduces a Merkle root.

Usage:
    distributor verify 0xAbC... 25 [--distribution distribution.json]
    distributor verify 0xAbC... 25 --root 0x... --proof 0x... --proof 0x...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from distributor.artifacts.io import load_distribution
from distributor.crypto.hashing import digest_from_hex, hash_leaf, to_hex
from distributor.merkle.merkle_tree import process_proof
from distributor.schemas.errors import DistributorException
from distributor.schemas.grants import normalize_address


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Without --root/--proof the root and proof come from the distribution
    document; either can be overridden on the command line.
    """
    try:
        address = normalize_address(args.address)
        amount = int(args.amount)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root_hex = args.root
    proof_hex = args.proof

    if root_hex is None or proof_hex is None:
        path = Path(args.distribution or args.cli_config.distribution_path)
        try:
            distribution = load_distribution(path)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        except DistributorException as e:
            print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        if root_hex is None:
            root_hex = distribution.root
        if proof_hex is None:
            entry = distribution.get_entry(address)
            if entry is None:
                print(f"Address not in distribution: {address}", file=sys.stderr)
                return EXIT_VERIFICATION_FAILED
            proof_hex = entry.proof

    try:
        root = digest_from_hex(root_hex)
        siblings = [digest_from_hex(p) for p in proof_hex]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    computed = process_proof(hash_leaf(address, amount), siblings)
    ok = computed == root

    if args.json:
        print(json.dumps({
            "address": address,
            "amount": str(amount),
            "valid": ok,
            "merkleRoot": to_hex(root),
            "computedRoot": to_hex(computed),
        }, indent=2))
    else:
        print(f"Valid proof: {ok}")

    if ok:
        logger.info("Proof verified for %s", address)
        return EXIT_SUCCESS
    logger.warning("Proof did not verify for %s", address)
    return EXIT_VERIFICATION_FAILED
