"""
CLI Proof Command

Look up the proof record for an address in a distribution document.

Usage:
    distributor proof 0xAbC... [--distribution distribution.json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from distributor.artifacts.io import load_distribution
from distributor.schemas.errors import DistributorException


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """Print {address, amount, index, proof} for an address."""
    path = Path(args.distribution or args.cli_config.distribution_path)
    try:
        distribution = load_distribution(path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except DistributorException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    entry = distribution.get_entry(args.address)
    if entry is None:
        print(f"Address not in distribution: {args.address}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(json.dumps({
        "address": entry.address,
        "amount": str(entry.amount),
        "index": entry.leaf_index,
        "proof": entry.proof,
        "merkleRoot": distribution.root,
    }, indent=2))
    return EXIT_SUCCESS
