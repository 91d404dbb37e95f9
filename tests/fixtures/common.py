"""
Common test fixtures shared by all modules.

Provides factory functions for core distributor data structures:
- Deterministic local accounts (keys 1..n)
- ClaimDomain
- Grants / MerkleDistribution
- Signed ClaimRequest
"""

from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from distributor.crypto.signatures import ClaimDomain, sign_claim
from distributor.merkle.tree_builder import TreeBuilder
from distributor.schemas.claims import ClaimRequest
from distributor.schemas.distribution import MerkleDistribution
from distributor.schemas.grants import Grant


TEST_CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


# =============================================================================
# Accounts
# =============================================================================

def make_account(seed: int) -> LocalAccount:
    """Local account whose private key is the integer `seed` (must be >= 1)."""
    return Account.from_key("0x" + f"{seed:064x}")


def make_accounts(count: int, start: int = 1) -> list[LocalAccount]:
    return [make_account(start + i) for i in range(count)]


# =============================================================================
# Domain
# =============================================================================

def make_domain(
    name: str = "MerkleDistributor",
    version: str = "1",
    chain_id: int = 31337,
    verifying_contract: str = TEST_CONTRACT,
) -> ClaimDomain:
    return ClaimDomain(
        name=name,
        version=version,
        chain_id=chain_id,
        verifying_contract=verifying_contract,
    )


# =============================================================================
# Grants / Distribution
# =============================================================================

def make_grants(
    accounts: list[LocalAccount],
    amount: int = 25,
    amounts: Optional[list[int]] = None,
) -> list[Grant]:
    """One grant per account; `amounts` overrides the flat `amount`."""
    if amounts is None:
        amounts = [amount] * len(accounts)
    return [
        Grant(address=account.address, amount=value)
        for account, value in zip(accounts, amounts)
    ]


def make_distribution(grants: list[Grant]) -> MerkleDistribution:
    return TreeBuilder(grants).build()


# =============================================================================
# Claims
# =============================================================================

def make_claim_request(
    account: LocalAccount,
    distribution: MerkleDistribution,
    domain: ClaimDomain,
    amount: Optional[int] = None,
    proof: Optional[list[str]] = None,
    signer: Optional[LocalAccount] = None,
) -> ClaimRequest:
    """
    Build a ClaimRequest for `account` using its published proof.

    Args:
        amount: Claimed amount (default: the granted amount)
        proof: Proof override (default: the published proof)
        signer: Account whose key signs (default: `account`)
    """
    entry = distribution.get_entry(account.address)
    if amount is None:
        amount = entry.amount
    if proof is None:
        proof = list(entry.proof) if entry else []
    signing_account = signer or account
    signed = sign_claim(signing_account.key, domain, account.address, amount)
    return ClaimRequest(
        address=account.address,
        amount=amount,
        proof=proof,
        signature=signed.signature_hex,
    )
