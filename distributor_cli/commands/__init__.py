"""
CLI command modules.
"""

from distributor_cli.commands import build, proof, verify, sign, claim

__all__ = ["build", "proof", "verify", "sign", "claim"]
