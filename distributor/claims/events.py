"""
Claim Event Log

Records one ClaimedEvent per successful claim and fans it out to
subscribers (auditors, indexers).
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from distributor.schemas.claims import ClaimedEvent


logger = logging.getLogger(__name__)

ClaimListener = Callable[[ClaimedEvent], None]


class ClaimEventLog:
    """
    Append-only log of claim-succeeded records.

    Usage:
        log = ClaimEventLog()
        log.subscribe(lambda event: print(event.address, event.amount))
        log.record(address, amount)
        events = log.get_events()
    """

    def __init__(self) -> None:
        self._events: list[ClaimedEvent] = []
        self._listeners: list[ClaimListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: ClaimListener) -> None:
        """Register a callable invoked with each new event."""
        self._listeners.append(listener)

    def record(self, address: str, amount: int) -> ClaimedEvent:
        """Append an event and notify listeners."""
        with self._lock:
            event = ClaimedEvent(
                sequence=len(self._events),
                address=address,
                amount=amount,
                recorded_at=datetime.now(timezone.utc),
            )
            self._events.append(event)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # Claim already committed
                logger.exception("Claim listener failed for %s", address)
        return event

    def get_events(self) -> list[ClaimedEvent]:
        with self._lock:
            return list(self._events)

    def events_for(self, address: str) -> list[ClaimedEvent]:
        with self._lock:
            return [e for e in self._events if e.address == address]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


__all__ = ["ClaimEventLog", "ClaimListener"]
