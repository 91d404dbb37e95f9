"""
Token Ledger Collaborator

The distributor never moves tokens itself: it calls a fungible-token
ledger exposing transfer(to, amount) -> bool. This module defines that
interface and an in-memory ledger used for simulation and tests.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol, runtime_checkable

from eth_utils import to_checksum_address


logger = logging.getLogger(__name__)


@runtime_checkable
class TokenLedger(Protocol):
    """Interface for the external token-transfer collaborator."""

    def transfer(self, to: str, amount: int) -> bool:
        """Move `amount` tokens from the distributor to `to`. Returns False on refusal."""
        ...


class InMemoryTokenLedger:
    """
    Minimal fungible-token ledger held in memory.

    The distributor's own balance is the pool that transfers draw from.
    A transfer that exceeds the pool is refused (returns False) and leaves
    every balance untouched.

    Usage:
        ledger = InMemoryTokenLedger(supply=100)
        ledger.transfer("0xAbC...", 25)
        ledger.balance_of("0xAbC...")  # 25
    """

    def __init__(self, supply: int = 0) -> None:
        if supply < 0:
            raise ValueError(f"Supply must be non-negative, got {supply}")
        self._pool = supply
        self._balances: dict[str, int] = {}
        self._lock = threading.Lock()
        self._transfer_count = 0

    @property
    def pool(self) -> int:
        """Tokens still held by the distributor."""
        return self._pool

    @property
    def transfer_count(self) -> int:
        return self._transfer_count

    def fund(self, amount: int) -> None:
        """Add tokens to the distributor's pool."""
        if amount < 0:
            raise ValueError(f"Funding amount must be non-negative, got {amount}")
        with self._lock:
            self._pool += amount

    def balance_of(self, account: str) -> int:
        return self._balances.get(to_checksum_address(account), 0)

    def transfer(self, to: str, amount: int) -> bool:
        if amount < 0:
            return False
        recipient = to_checksum_address(to)
        with self._lock:
            if amount > self._pool:
                logger.warning(
                    "Transfer of %d to %s refused: pool holds %d", amount, recipient, self._pool
                )
                return False
            self._pool -= amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
            self._transfer_count += 1
        return True


__all__ = ["TokenLedger", "InMemoryTokenLedger"]
