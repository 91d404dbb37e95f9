"""
Token ledger collaborator interface and in-memory implementation.
"""

from .ledger import TokenLedger, InMemoryTokenLedger

__all__ = ["TokenLedger", "InMemoryTokenLedger"]
