"""
Payload Codec

Turns the raw bytes of a rollup input into exactly one decoded action.

Advance inputs are classified in this order:
1. UTF-8 JSON with both "win" and "loss"        -> Settle
2. UTF-8 JSON with action "deposit"/"transfer"  -> Deposit / Transfer
3. any other UTF-8 JSON                          -> Unrecognized
4. not JSON at all                               -> binary deposit notification

A JSON input is never retried as a binary deposit, and binary input is never
read as an application action.

Binary deposit layout (at least 52 bytes):
    [0, 20)   recipient address
    [20, 52)  amount, big-endian uint256
"""

from __future__ import annotations
import enum
import json
from dataclasses import dataclass
from typing import Any, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import decode_hex, encode_hex, to_checksum_address
from pydantic import ValidationError

from ledger.errors import (
    InvalidAddress,
    InvalidAmount,
    MalformedInspectPayload,
    MalformedPayload,
    MissingField,
    PayloadTooShort,
)
from rollup.models import DepositAction, SettleAction, TransferAction

ADDRESS_SIZE = 20
AMOUNT_SIZE = 32
DEPOSIT_PAYLOAD_SIZE = ADDRESS_SIZE + AMOUNT_SIZE


class RequestKind(enum.Enum):
    ADVANCE = "advance"
    INSPECT = "inspect"


@dataclass(frozen=True)
class Deposit:
    recipient: str
    amount: int


@dataclass(frozen=True)
class Transfer:
    sender: str
    recipient: str
    amount: int


@dataclass(frozen=True)
class Settle:
    winner: str
    loser: str


@dataclass(frozen=True)
class BalanceQuery:
    user: str


@dataclass(frozen=True)
class Unrecognized:
    reason: str = "Unrecognized structure"


DecodedAction = Union[Deposit, Transfer, Settle, BalanceQuery, Unrecognized]


# ---------------------------------------------------------------------------
# Hex helpers
# ---------------------------------------------------------------------------

def decode_hex_payload(payload: str) -> bytes:
    try:
        return decode_hex(payload or "0x")
    except (ValueError, TypeError) as e:
        raise MalformedPayload(f"payload is not valid hex: {e}") from e


def encode_text_payload(text: str) -> str:
    return encode_hex(text.encode("utf-8"))


def encode_voucher_amount(amount: int) -> bytes:
    if amount < 0 or amount >= 2**256:
        raise ValueError(f"voucher amount out of uint256 range: {amount}")
    return abi_encode(["uint256"], [amount])


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

_NOT_JSON = object()


def _parse_json(raw: bytes) -> Any:
    """Return the parsed JSON value, or _NOT_JSON when raw is not UTF-8 JSON."""
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return _NOT_JSON


def parse_binary_deposit(raw: bytes) -> Deposit:
    if len(raw) < DEPOSIT_PAYLOAD_SIZE:
        raise PayloadTooShort(len(raw), DEPOSIT_PAYLOAD_SIZE)

    try:
        recipient = to_checksum_address(raw[:ADDRESS_SIZE])
    except (ValueError, TypeError) as e:
        raise InvalidAddress(f"Invalid deposit payload: address extraction failed: {e}") from e

    (amount,) = abi_decode(["uint256"], raw[ADDRESS_SIZE:DEPOSIT_PAYLOAD_SIZE])
    return Deposit(recipient=recipient, amount=amount)


def _validate_action(model, action: str, data: dict):
    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        missing = []
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else action
            if err["type"] == "missing" or err.get("input") is None:
                missing.append(field)
        if missing:
            raise MissingField(action, missing) from e
        first = e.errors()[0]
        msg = f"Invalid {action} request: {first['msg']}"
        if first["loc"] and first["loc"][0] == "amount":
            raise InvalidAmount(msg) from e
        raise MalformedPayload(msg) from e

    if getattr(parsed, "amount", 0) < 0:
        raise InvalidAmount(f"Invalid {action} request: negative amount {parsed.amount}")
    return parsed


def _classify_advance(parsed: Any) -> DecodedAction:
    if not isinstance(parsed, dict):
        return Unrecognized()

    if "win" in parsed and "loss" in parsed:
        body = _validate_action(SettleAction, "settle", parsed)
        return Settle(winner=body.win, loser=body.loss)

    action = parsed.get("action")
    if action == "deposit":
        body = _validate_action(DepositAction, "deposit", parsed)
        return Deposit(recipient=body.sender, amount=body.amount)
    if action == "transfer":
        body = _validate_action(TransferAction, "transfer", parsed)
        return Transfer(sender=body.sender, recipient=body.recipient, amount=body.amount)

    return Unrecognized()


def _classify_inspect(parsed: Any) -> DecodedAction:
    if isinstance(parsed, dict) and parsed.get("action") == "balance" and parsed.get("user"):
        return BalanceQuery(user=str(parsed["user"]))
    return Unrecognized()


def decode(raw: bytes, context: RequestKind) -> DecodedAction:
    parsed = _parse_json(raw)

    if context is RequestKind.INSPECT:
        if parsed is _NOT_JSON:
            raise MalformedInspectPayload("inspect payload is not UTF-8 JSON")
        return _classify_inspect(parsed)

    if parsed is _NOT_JSON:
        return parse_binary_deposit(raw)
    return _classify_advance(parsed)
