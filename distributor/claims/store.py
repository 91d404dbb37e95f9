"""
Claimed-Set Store

Authoritative record of which addresses have redeemed their grant.
Owned by a single ClaimVerifier; never reset.
"""

from __future__ import annotations

import threading


class ClaimedSet:
    """
    Address -> claimed flag, guarded by one re-entrant lock.

    The verifier holds `lock` for the whole check/mark/transfer sequence so
    two claims for the same address can never both observe "unclaimed".
    `unmark` exists only for rolling back a mark whose transfer failed
    inside that same critical section.
    """

    def __init__(self) -> None:
        self._claimed: dict[str, bool] = {}
        self.lock = threading.RLock()

    def is_claimed(self, address: str) -> bool:
        with self.lock:
            return self._claimed.get(address, False)

    def mark(self, address: str) -> None:
        with self.lock:
            if self._claimed.get(address, False):
                raise RuntimeError(f"{address} is already marked claimed")
            self._claimed[address] = True

    def unmark(self, address: str) -> None:
        with self.lock:
            self._claimed.pop(address, None)

    def claimed_addresses(self) -> list[str]:
        with self.lock:
            return [address for address, claimed in self._claimed.items() if claimed]

    def __len__(self) -> int:
        with self.lock:
            return sum(1 for claimed in self._claimed.values() if claimed)


__all__ = ["ClaimedSet"]
