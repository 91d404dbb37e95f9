"""
Runtime Configuration

Published configuration for a distributor: the committed root, the
signature domain and where the proof-distribution document lives.
Everything the verifier needs is injected from here at construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from distributor.crypto.signatures import ClaimDomain

load_dotenv()


ENV_PREFIX = "DISTRIBUTOR_"
ZERO_ADDRESS = "0x" + "00" * 20


@dataclass
class DomainConfig:
    """EIP-712 domain-separation parameters for claim signatures."""
    name: str = "MerkleDistributor"
    version: str = "1"
    chain_id: int = 1
    verifying_contract: str = ZERO_ADDRESS

    def to_claim_domain(self) -> ClaimDomain:
        return ClaimDomain(
            name=self.name,
            version=self.version,
            chain_id=self.chain_id,
            verifying_contract=self.verifying_contract,
        )


@dataclass
class ServiceConfig:
    """Configuration for the proof-lookup / claim HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    token_supply: Optional[int] = None  # defaults to the distribution's token total


@dataclass
class DistributorConfig:
    """
    Complete configuration for one distributor instance.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    root: Optional[str] = None
    distribution_path: Optional[str] = None
    domain: DomainConfig = field(default_factory=DomainConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - DISTRIBUTOR_ROOT: Committed Merkle root (0x hex)
        - DISTRIBUTOR_DISTRIBUTION_PATH: Path to the distribution JSON document
        - DISTRIBUTOR_DOMAIN_NAME / DISTRIBUTOR_DOMAIN_VERSION: EIP-712 domain name/version
        - DISTRIBUTOR_CHAIN_ID: Chain id bound into signatures
        - DISTRIBUTOR_CONTRACT: Verifying contract address bound into signatures
        - DISTRIBUTOR_LOG_LEVEL: Service log level
        - DISTRIBUTOR_TOKEN_SUPPLY: Pool size for the in-memory ledger
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ROOT"):
            overrides["root"] = os.getenv(f"{ENV_PREFIX}ROOT")
        if os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH"):
            overrides["distribution_path"] = os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH")

        # Domain settings
        if os.getenv(f"{ENV_PREFIX}DOMAIN_NAME"):
            overrides.setdefault("domain", {})["name"] = os.getenv(f"{ENV_PREFIX}DOMAIN_NAME")
        if os.getenv(f"{ENV_PREFIX}DOMAIN_VERSION"):
            overrides.setdefault("domain", {})["version"] = os.getenv(f"{ENV_PREFIX}DOMAIN_VERSION")
        if os.getenv(f"{ENV_PREFIX}CHAIN_ID"):
            overrides.setdefault("domain", {})["chain_id"] = int(os.getenv(f"{ENV_PREFIX}CHAIN_ID", "1"))
        if os.getenv(f"{ENV_PREFIX}CONTRACT"):
            overrides.setdefault("domain", {})["verifying_contract"] = os.getenv(f"{ENV_PREFIX}CONTRACT")

        # Service settings
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("service", {})["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}TOKEN_SUPPLY"):
            overrides.setdefault("service", {})["token_supply"] = int(
                os.getenv(f"{ENV_PREFIX}TOKEN_SUPPLY", "0")
            )

        return overrides

    @classmethod
    def from_env(cls) -> "DistributorConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DistributorConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DistributorConfig":
        """Load configuration from a dictionary (supports partial data)."""
        domain_data = data.get("domain", {})
        service_data = data.get("service", {})

        domain = DomainConfig(**domain_data) if domain_data else DomainConfig()
        service = ServiceConfig(**service_data) if service_data else ServiceConfig()

        return cls(
            root=data.get("root"),
            distribution_path=data.get("distribution_path"),
            domain=domain,
            service=service,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "DistributorConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        for key in ("root", "distribution_path"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        for key, value in overrides.get("domain", {}).items():
            setattr(new_config.domain, key, value)

        for key, value in overrides.get("service", {}).items():
            setattr(new_config.service, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "root": self.root,
            "distribution_path": self.distribution_path,
            "domain": {
                "name": self.domain.name,
                "version": self.domain.version,
                "chain_id": self.domain.chain_id,
                "verifying_contract": self.domain.verifying_contract,
            },
            "service": {
                "host": self.service.host,
                "port": self.service.port,
                "log_level": self.service.log_level,
                "token_supply": self.service.token_supply,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[DistributorConfig] = None


def get_default_config() -> DistributorConfig:
    """Get the default distributor configuration."""
    global _default_config
    if _default_config is None:
        _default_config = DistributorConfig.from_env()
    return _default_config


def set_default_config(config: Optional[DistributorConfig]) -> None:
    """Set (or clear, with None) the default distributor configuration."""
    global _default_config
    _default_config = config
