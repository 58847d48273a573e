"""Borsh decoding, entry-pattern matching, a pattern HTTP endpoint and position bookkeeping for bonding-curve tokens."""

__version__ = "0.1.0"

__all__ = [
    "borsh",
    "idl",
    "logs",
    "pattern_api",
    "pattern_translator",
    "token_record",
    "update_status",
]