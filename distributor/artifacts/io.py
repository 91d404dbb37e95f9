"""
Whitelist & Distribution IO
File: io.py

Purpose: Load whitelists (CSV or JSON) into grants and save/load the
published proof-distribution document.

Whitelist formats:
- CSV with an `address,amount` header
- JSON list: [{"address": "0x...", "amount": "25"}, ...]
- JSON mapping: {"0x...": "25", ...}  (insertion order is the leaf order)
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from distributor.schemas.distribution import MerkleDistribution
from distributor.schemas.errors import DistributionFormatException, DuplicateGrantException
from distributor.schemas.grants import Grant, normalize_address


logger = logging.getLogger(__name__)


def _reject_repeated_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """object_pairs_hook: a JSON object may not repeat a key."""
    positions: dict[str, list[int]] = {}
    for i, (key, _) in enumerate(pairs):
        positions.setdefault(key, []).append(i)
    for key, indices in positions.items():
        if len(indices) > 1:
            try:
                address = normalize_address(key)
            except ValueError:
                raise DistributionFormatException(
                    f"Key {key!r} appears more than once in a whitelist object",
                    details={"key": key, "indices": indices},
                ) from None
            raise DuplicateGrantException(address, indices)
    return dict(pairs)


def _make_grant(address: Any, amount: Any, where: str) -> Grant:
    try:
        return Grant(address=address, amount=int(str(amount).strip()))
    except (ValidationError, ValueError) as e:
        raise DistributionFormatException(
            f"Invalid grant at {where}: {e}",
            details={"where": where},
        ) from e


def parse_grants(data: Any) -> list[Grant]:
    """Build grants from a decoded JSON whitelist (list or mapping)."""
    if isinstance(data, dict):
        return [
            _make_grant(address, amount, f"key {address}")
            for address, amount in data.items()
        ]
    if isinstance(data, list):
        grants: list[Grant] = []
        for i, row in enumerate(data):
            if not isinstance(row, dict) or "address" not in row or "amount" not in row:
                raise DistributionFormatException(
                    f"Whitelist entry {i} must be an object with address and amount",
                )
            grants.append(_make_grant(row["address"], row["amount"], f"entry {i}"))
        return grants
    raise DistributionFormatException(
        f"Whitelist must be a JSON list or object, got {type(data).__name__}",
    )


def load_grants_csv(path: str | Path) -> list[Grant]:
    """Load grants from a CSV file with an address,amount header. Blank rows are skipped."""
    path = Path(path)
    grants: list[Grant] = []
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        fieldnames = reader.fieldnames or []
        if "address" not in fieldnames or "amount" not in fieldnames:
            raise DistributionFormatException(
                f"CSV needs an address,amount header: {path}",
            )
        for line_no, row in enumerate(reader, start=2):
            address = (row.get("address") or "").strip()
            amount = (row.get("amount") or "").strip()
            if not address and not amount:
                continue
            grants.append(_make_grant(address, amount, f"{path.name}:{line_no}"))
    return grants


def load_grants_json(path: str | Path) -> list[Grant]:
    """
    Load grants from a JSON whitelist file.

    Raises:
        DuplicateGrantException: If a mapping whitelist repeats an address key
        DistributionFormatException: If the file is not a valid whitelist
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"), object_pairs_hook=_reject_repeated_keys)
    except json.JSONDecodeError as e:
        raise DistributionFormatException(f"Invalid JSON in {path}: {e}") from e
    return parse_grants(data)


def load_grants(path: str | Path) -> list[Grant]:
    """Load grants from a .csv or .json whitelist."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Whitelist not found: {path}")
    if path.suffix.lower() == ".csv":
        grants = load_grants_csv(path)
    else:
        grants = load_grants_json(path)
    logger.info("Loaded %d grants from %s", len(grants), path)
    return grants


def dump_distribution(distribution: MerkleDistribution) -> str:
    """Serialize a distribution to its JSON document."""
    return json.dumps(distribution.to_document(), indent=2) + "\n"


def save_distribution(distribution: MerkleDistribution, path: str | Path) -> Path:
    """Write the distribution document, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_distribution(distribution), encoding="utf-8")
    logger.info("Wrote distribution (root=%s) to %s", distribution.root, path)
    return path


def load_distribution(path: str | Path) -> MerkleDistribution:
    """
    Read a distribution document.

    Raises:
        FileNotFoundError: If the file does not exist
        DistributionFormatException: If the document is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Distribution file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DistributionFormatException(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise DistributionFormatException(f"Distribution document must be a JSON object: {path}")
    return MerkleDistribution.from_document(data)


__all__ = [
    "parse_grants",
    "load_grants",
    "load_grants_csv",
    "load_grants_json",
    "dump_distribution",
    "save_distribution",
    "load_distribution",
]
