"""
Errors raised while handling a single rollup input.

Every one of these is input-fatal but process-surviving: the action router
catches LedgerError at the handler boundary, reports the message and rejects.
"""

from __future__ import annotations


class LedgerError(RuntimeError):
    pass


class PayloadTooShort(LedgerError):
    def __init__(self, length: int, required: int) -> None:
        super().__init__(
            f"Invalid deposit payload: expected at least {required} bytes, got {length}"
        )
        self.length = length
        self.required = required


class InvalidAddress(LedgerError):
    pass


class MalformedPayload(LedgerError):
    pass


class MalformedInspectPayload(MalformedPayload):
    pass


class InsufficientBalance(LedgerError):
    def __init__(self, address: str, balance: int, amount: int) -> None:
        super().__init__(
            f"Insufficient balance: {address} has {balance}, needs {amount}"
        )
        self.address = address
        self.balance = balance
        self.amount = amount


class MissingField(LedgerError):
    def __init__(self, action: str, fields) -> None:
        names = ", ".join(fields)
        super().__init__(f"Missing {names} in {action} request.")
        self.action = action
        self.fields = list(fields)


class InvalidAmount(LedgerError):
    pass


class HostUnavailable(LedgerError):
    """The rollup host could not be reached or answered with a failure."""
