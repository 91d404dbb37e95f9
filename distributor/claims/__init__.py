"""
Claim verification: the verifier state machine, its claimed-set and event log.
"""

from .store import ClaimedSet
from .events import ClaimEventLog, ClaimListener
from .verifier import ClaimVerifier

__all__ = [
    "ClaimedSet",
    "ClaimEventLog",
    "ClaimListener",
    "ClaimVerifier",
]
