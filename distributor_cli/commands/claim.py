"""
CLI Claim Command

Replay a batch of claim requests against a distribution using an
in-memory token ledger funded with the distribution's token total.
Useful for dry-running claimant materials before publication.

Usage:
    distributor claim requests.json [--distribution distribution.json] [--json]

requests.json holds a list of {"address", "amount", "proof", "signature"}
objects; "proof" may be omitted to use the proof from the distribution.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from distributor.artifacts.io import load_distribution
from distributor.claims.verifier import ClaimVerifier
from distributor.crypto.signatures import ClaimDomain
from distributor.schemas.claims import ClaimRequest, ClaimResult
from distributor.schemas.distribution import MerkleDistribution
from distributor.schemas.errors import DistributorException
from distributor.token.ledger import InMemoryTokenLedger


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _load_requests(path: Path, distribution: MerkleDistribution) -> list[ClaimRequest]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError("Claim requests file must hold a JSON list")

    requests: list[ClaimRequest] = []
    for item in raw:
        data = dict(item)
        if "proof" not in data:
            entry = distribution.get_entry(str(data.get("address", "")))
            data["proof"] = list(entry.proof) if entry else []
        data["amount"] = int(data["amount"])
        requests.append(ClaimRequest(**data))
    return requests


def run_claims(
    distribution: MerkleDistribution,
    requests: list[ClaimRequest],
    domain: ClaimDomain,
) -> tuple[list[ClaimResult], InMemoryTokenLedger]:
    """Submit requests in order against a fresh verifier and ledger."""
    ledger = InMemoryTokenLedger(supply=distribution.token_total)
    verifier = ClaimVerifier.from_distribution(distribution, ledger, domain)
    results = [verifier.submit(request) for request in requests]
    return results, ledger


def claim_cmd(args: Namespace) -> int:
    """Execute the claim simulation."""
    dist_path = Path(args.distribution or args.cli_config.distribution_path)
    try:
        distribution = load_distribution(dist_path)
        requests = _load_requests(Path(args.requests), distribution)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except DistributorException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (ValueError, KeyError, TypeError, ValidationError) as e:
        print(f"Error reading claim requests: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    domain = args.cli_config.domain.to_claim_domain()
    results, ledger = run_claims(distribution, requests, domain)
    accepted = sum(1 for r in results if r.ok)
    logger.info("Simulated %d claims against %s: %d accepted", len(results), distribution.root, accepted)

    if args.json:
        print(json.dumps({
            "merkleRoot": distribution.root,
            "accepted": accepted,
            "rejected": len(results) - accepted,
            "remainingPool": str(ledger.pool),
            "results": [r.model_dump(mode="json") for r in results],
        }, indent=2))
    else:
        for r in results:
            status = "✓" if r.ok else "✗"
            reason = "" if r.ok else f" [{r.error_code}] {r.error.message}"
            print(f"  {status} {r.address} {r.amount}{reason}")
        print(f"\n{accepted}/{len(results)} claims accepted, pool remaining {ledger.pool}")

    return EXIT_SUCCESS if accepted == len(results) else EXIT_VERIFICATION_FAILED
