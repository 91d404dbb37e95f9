"""
Test fixtures package for Merkle distributor tests.

This package provides factory functions for creating test objects.

Usage:
    from fixtures import make_accounts, make_grants, make_distribution

    def test_something():
        accounts = make_accounts(4)
        distribution = make_distribution(make_grants(accounts))
"""

from .common import (
    TEST_CONTRACT,
    make_account,
    make_accounts,
    make_domain,
    make_grants,
    make_distribution,
    make_claim_request,
)

__all__ = [
    "TEST_CONTRACT",
    "make_account",
    "make_accounts",
    "make_domain",
    "make_grants",
    "make_distribution",
    "make_claim_request",
]
