"""
Distributor CLI

Command-line interface for building Merkle distributions and checking claims.

Usage:
    python -m distributor_cli build whitelist.csv --out distribution.json
    python -m distributor_cli proof 0xAbC...
    python -m distributor_cli verify 0xAbC... 25
    python -m distributor_cli sign 25 --key 0x...
    python -m distributor_cli claim requests.json
"""

__version__ = "0.1.0"
