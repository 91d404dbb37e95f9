"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m distributor_cli build <whitelist> [--out PATH] [--json]
    python -m distributor_cli proof <address> [--distribution PATH]
    python -m distributor_cli verify <address> <amount> [--root HEX --proof HEX ...]
    python -m distributor_cli sign <amount> [--key HEX] [--address ADDR]
    python -m distributor_cli claim <requests.json> [--distribution PATH] [--json]
    python -m distributor_cli config --init

Environment Variables:
    DISTRIBUTOR_DOMAIN_NAME      EIP-712 domain name (default: MerkleDistributor)
    DISTRIBUTOR_DOMAIN_VERSION   EIP-712 domain version (default: 1)
    DISTRIBUTOR_CHAIN_ID         Chain id bound into signatures (default: 1)
    DISTRIBUTOR_CONTRACT         Verifying contract address
    DISTRIBUTOR_DISTRIBUTION_PATH  Default distribution document
    DISTRIBUTOR_LOG_LEVEL        Log level (default: INFO)
    DISTRIBUTOR_PRIVATE_KEY      Signing key for `sign`
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from distributor_cli import __version__
from distributor_cli.commands import build, proof, verify, sign, claim
from distributor_cli.config import config_to_dict, get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="distributor",
        description="Merkle distributor CLI - build trees, look up and verify proofs, sign and simulate claims.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./distributor.json or ~/.config/distributor/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a Merkle distribution from a whitelist",
        description="Read an address,amount whitelist (CSV or JSON) and write the root plus every proof.",
    )
    build_parser.add_argument("whitelist", type=str, help="Whitelist file (.csv or .json)")
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output distribution document (default: from config)",
    )
    build_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the proof record for an address",
    )
    proof_parser.add_argument("address", type=str, help="Claiming address")
    proof_parser.add_argument("--distribution", "-d", type=str, default=None, help="Distribution document")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof offline",
        description="Recompute the leaf for (address, amount), walk the proof and compare with the root.",
    )
    verify_parser.add_argument("address", type=str, help="Claiming address")
    verify_parser.add_argument("amount", type=str, help="Claimed amount")
    verify_parser.add_argument("--distribution", "-d", type=str, default=None, help="Distribution document")
    verify_parser.add_argument("--root", type=str, default=None, help="Merkle root (overrides distribution)")
    verify_parser.add_argument(
        "--proof",
        type=str,
        action="append",
        default=None,
        help="Proof element, repeat in bottom-up order (overrides distribution)",
    )
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- sign command ---
    sign_parser = subparsers.add_parser(
        "sign",
        help="Sign a claim authorization (EIP-712)",
    )
    sign_parser.add_argument("amount", type=str, help="Claimed amount")
    sign_parser.add_argument("--key", type=str, default=None, help="Private key (or DISTRIBUTOR_PRIVATE_KEY)")
    sign_parser.add_argument("--address", type=str, default=None, help="Claiming address (default: key's address)")
    sign_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    sign_parser.set_defaults(func=sign.sign_cmd)

    # --- claim command ---
    claim_parser = subparsers.add_parser(
        "claim",
        help="Simulate claims against an in-memory ledger",
    )
    claim_parser.add_argument("requests", type=str, help="JSON list of claim requests")
    claim_parser.add_argument("--distribution", "-d", type=str, default=None, help="Distribution document")
    claim_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    claim_parser.set_defaults(func=claim.claim_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="distributor.json",
        help="Path for config file (default: distributor.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (DISTRIBUTOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(config_to_dict(args.cli_config), indent=2))
        return EXIT_SUCCESS

    print("Usage: distributor config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
