"""
Runtime Configuration Module

Provides configuration loading and management for the distributor.
"""

from .runtime import (
    DistributorConfig,
    DomainConfig,
    ServiceConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DistributorConfig",
    "DomainConfig",
    "ServiceConfig",
    "get_default_config",
    "set_default_config",
]
