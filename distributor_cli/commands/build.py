"""
CLI Build Command

Build a Merkle distribution from a whitelist.

Usage:
    distributor build whitelist.csv --out distribution.json [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from distributor.artifacts.io import load_grants, save_distribution
from distributor.merkle.merkle_tree import compute_tree_depth
from distributor.merkle.tree_builder import TreeBuilder
from distributor.schemas.errors import DistributorException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    whitelist: str = ""
    output_path: str = ""
    merkle_root: str = ""
    leaf_count: int = 0
    tree_depth: int = 0
    token_total: str = "0"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    whitelist = Path(args.whitelist)
    out_path = Path(args.out or args.cli_config.distribution_path)

    try:
        grants = load_grants(whitelist)
        distribution = TreeBuilder(grants).build()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except DistributorException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    save_distribution(distribution, out_path)

    summary = BuildSummary(
        whitelist=str(whitelist),
        output_path=str(out_path),
        merkle_root=distribution.root,
        leaf_count=distribution.leaf_count,
        tree_depth=compute_tree_depth(distribution.leaf_count),
        token_total=str(distribution.token_total),
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"Merkle root: {summary.merkle_root}")
        print(f"Leaves:      {summary.leaf_count} (depth {summary.tree_depth})")
        print(f"Token total: {summary.token_total}")
        print(f"Wrote {summary.output_path}")

    return EXIT_SUCCESS
