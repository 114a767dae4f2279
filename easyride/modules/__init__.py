"""Domain modules of the wallet service."""

from . import common, profiles, recharges, wallets

__all__ = [
    "common",
    "profiles",
    "recharges",
    "wallets",
]
