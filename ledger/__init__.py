"""
Rollup Ledger Package

Provides:
- Ledger: in-memory address -> balance map (deposit, transfer, settle)
- errors: exception types raised while handling a single rollup input

The ledger is memory-resident only. It lives for the process lifetime and is
owned by the request loop, which hands it to the action router per request.
"""

from ledger.balance_ledger import Ledger, normalize_address
from ledger.errors import (
    HostUnavailable,
    InsufficientBalance,
    InvalidAddress,
    InvalidAmount,
    LedgerError,
    MalformedInspectPayload,
    MalformedPayload,
    MissingField,
    PayloadTooShort,
)

__all__ = [
    "Ledger",
    "normalize_address",
    "LedgerError",
    "PayloadTooShort",
    "InvalidAddress",
    "MalformedPayload",
    "MalformedInspectPayload",
    "InsufficientBalance",
    "MissingField",
    "InvalidAmount",
    "HostUnavailable",
]
