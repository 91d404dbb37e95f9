"""
CLI Configuration

Configuration management for the distributor CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from distributor.config.runtime import DomainConfig


# Environment variable prefix
ENV_PREFIX = "DISTRIBUTOR_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Signature domain
    domain: DomainConfig = field(default_factory=DomainConfig)

    # Default distribution document
    distribution_path: str = "distribution.json"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None


def _domain_from_dict(data: dict[str, Any], base: DomainConfig) -> DomainConfig:
    return DomainConfig(
        name=data.get("name", base.name),
        version=data.get("version", base.version),
        chain_id=int(data.get("chain_id", base.chain_id)),
        verifying_contract=data.get("verifying_contract", base.verifying_contract),
    )


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()
    config.domain = _domain_from_dict(data.get("domain", {}), config.domain)
    config.distribution_path = data.get("distribution_path", config.distribution_path)
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    return config


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """Overlay DISTRIBUTOR_* environment variables (env takes precedence)."""
    if os.getenv(f"{ENV_PREFIX}DOMAIN_NAME"):
        config.domain.name = os.getenv(f"{ENV_PREFIX}DOMAIN_NAME", config.domain.name)
    if os.getenv(f"{ENV_PREFIX}DOMAIN_VERSION"):
        config.domain.version = os.getenv(f"{ENV_PREFIX}DOMAIN_VERSION", config.domain.version)
    if os.getenv(f"{ENV_PREFIX}CHAIN_ID"):
        config.domain.chain_id = int(os.getenv(f"{ENV_PREFIX}CHAIN_ID", "1"))
    if os.getenv(f"{ENV_PREFIX}CONTRACT"):
        config.domain.verifying_contract = os.getenv(
            f"{ENV_PREFIX}CONTRACT", config.domain.verifying_contract
        )
    if os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH"):
        config.distribution_path = os.getenv(
            f"{ENV_PREFIX}DISTRIBUTION_PATH", config.distribution_path
        )
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "distributor.json",
            Path.cwd() / ".distributor.json",
            Path.home() / ".config" / "distributor" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return apply_env_overrides(config)


def config_to_dict(config: CLIConfig) -> dict[str, Any]:
    return {
        "domain": {
            "name": config.domain.name,
            "version": config.domain.version,
            "chain_id": config.domain.chain_id,
            "verifying_contract": config.domain.verifying_contract,
        },
        "distribution_path": config.distribution_path,
        "log_level": config.log_level,
        "log_file": config.log_file,
    }


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(config_to_dict(CLIConfig()), indent=2) + "\n"
