"""Encoding, decoding and dispatch of SCI, SCI-P and SCI-LS telegrams."""

__version__ = "0.1.0"

__all__ = [
    "hashmap",
    "telegram",
    "factory",
    "scip_telegrams",
    "scils_telegrams",
    "scip",
    "scils",
]