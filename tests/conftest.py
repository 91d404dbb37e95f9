"""
Pytest configuration and shared fixtures for Merkle distributor tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_account = _common.make_account
make_accounts = _common.make_accounts
make_domain = _common.make_domain
make_grants = _common.make_grants
make_distribution = _common.make_distribution
make_claim_request = _common.make_claim_request


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def accounts():
    """Four deterministic local accounts."""
    return make_accounts(4)


@pytest.fixture
def domain():
    """Default EIP-712 claim domain for tests."""
    return make_domain()


@pytest.fixture
def grants(accounts):
    """Four grants of 25 tokens, one per account."""
    return make_grants(accounts, amount=25)


@pytest.fixture
def distribution(grants):
    """Distribution built from the four 25-token grants."""
    return make_distribution(grants)


@pytest.fixture
def ledger(distribution):
    """In-memory ledger funded with exactly the distribution's total."""
    from distributor.token.ledger import InMemoryTokenLedger
    return InMemoryTokenLedger(supply=distribution.token_total)


@pytest.fixture
def verifier(distribution, ledger, domain):
    """ClaimVerifier over the four-grant distribution."""
    from distributor.claims.verifier import ClaimVerifier
    return ClaimVerifier.from_distribution(distribution, ledger, domain)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove DISTRIBUTOR_* variables so config tests start from defaults."""
    for name in [
        "DISTRIBUTOR_ROOT",
        "DISTRIBUTOR_DISTRIBUTION_PATH",
        "DISTRIBUTOR_DOMAIN_NAME",
        "DISTRIBUTOR_DOMAIN_VERSION",
        "DISTRIBUTOR_CHAIN_ID",
        "DISTRIBUTOR_CONTRACT",
        "DISTRIBUTOR_LOG_LEVEL",
        "DISTRIBUTOR_LOG_FILE",
        "DISTRIBUTOR_TOKEN_SUPPLY",
        "DISTRIBUTOR_PRIVATE_KEY",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_rejected():
    """Helper to assert a ClaimResult was rejected with a given error code."""
    def _assert(result, code: str):
        assert not result.ok, f"Expected rejection {code}, claim was accepted"
        assert result.error_code == code, f"Expected {code}, got {result.error_code}"
    return _assert
