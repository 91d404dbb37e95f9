"""API route handlers."""

from api.routes import health, proofs, claims

__all__ = ["health", "proofs", "claims"]
