"""
API Dependencies

Dependency injection for the API.
Holds the single distributor instance the routes share: the published
distribution, the token ledger and the claim verifier built over them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from distributor.artifacts.io import load_distribution
from distributor.claims.verifier import ClaimVerifier
from distributor.config.runtime import DistributorConfig
from distributor.crypto.hashing import digest_from_hex, to_hex
from distributor.schemas.distribution import MerkleDistribution
from distributor.schemas.errors import ConfigException, DistributionFormatException
from distributor.token.ledger import InMemoryTokenLedger

logger = logging.getLogger(__name__)


@dataclass
class DistributorService:
    """Everything a request handler needs for one published distribution."""

    config: DistributorConfig
    distribution: MerkleDistribution
    ledger: InMemoryTokenLedger
    verifier: ClaimVerifier

    @classmethod
    def create(
        cls,
        config: DistributorConfig,
        distribution: MerkleDistribution,
    ) -> "DistributorService":
        """
        Wire a verifier over a distribution.

        If the config pins a root, it must match the distribution's root.
        The ledger is funded with service.token_supply, or the
        distribution's token total when unset.

        Raises:
            ConfigException: pinned root is malformed or does not match
        """
        if config.root:
            try:
                pinned = to_hex(digest_from_hex(config.root))
            except ValueError as e:
                raise ConfigException(f"Configured root is not a 32-byte hex digest: {e}") from e
            if pinned != distribution.root.lower():
                raise ConfigException(
                    "Configured root does not match the distribution document",
                    details={"configured": pinned, "distribution": distribution.root},
                )

        supply = config.service.token_supply
        if supply is None:
            supply = distribution.token_total
        ledger = InMemoryTokenLedger(supply=supply)
        verifier = ClaimVerifier.from_distribution(
            distribution, ledger, config.domain.to_claim_domain()
        )
        logger.info(
            "Distributor ready: root=%s leaves=%d pool=%d",
            distribution.root, distribution.leaf_count, supply,
        )
        return cls(config=config, distribution=distribution, ledger=ledger, verifier=verifier)

    @classmethod
    def from_config(cls, config: DistributorConfig) -> "DistributorService":
        """Load the distribution document named by the config."""
        if not config.distribution_path:
            raise ConfigException(
                "No distribution document configured (set DISTRIBUTOR_DISTRIBUTION_PATH)"
            )
        return cls.create(config, load_distribution(config.distribution_path))


_service: Optional[DistributorService] = None


def get_service() -> DistributorService:
    """
    Return the shared DistributorService, loading it from the environment
    on first use.

    Raises:
        ServiceUnavailableError: no distribution configured, or the document
            is missing or malformed
    """
    global _service
    if _service is None:
        from api.errors import ServiceUnavailableError

        config = DistributorConfig.from_env()
        try:
            _service = DistributorService.from_config(config)
        except FileNotFoundError as e:
            raise ServiceUnavailableError(str(e)) from e
        except (ConfigException, DistributionFormatException) as e:
            raise ServiceUnavailableError(e.message, details=e.details) from e
    return _service


def set_service(service: Optional[DistributorService]) -> None:
    """Install (or clear, with None) the shared DistributorService."""
    global _service
    _service = service
