"""
Whitelist and distribution document IO.
"""

from .io import (
    parse_grants,
    load_grants,
    load_grants_csv,
    load_grants_json,
    dump_distribution,
    save_distribution,
    load_distribution,
)

__all__ = [
    "parse_grants",
    "load_grants",
    "load_grants_csv",
    "load_grants_json",
    "dump_distribution",
    "save_distribution",
    "load_distribution",
]
