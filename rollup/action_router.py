"""
Action Router

Per input: decode -> mutate or query the ledger -> emit events -> status.

The router never raises for a bad input. Every LedgerError is turned into an
"Error: ..." report and a "reject" status; the request loop only sees the
status.
"""

from __future__ import annotations
from typing import Optional

from ledger.balance_ledger import Ledger
from ledger.errors import HostUnavailable, LedgerError
from rollup.emitter import EventEmitter
from rollup.log import log, log_error
from rollup.models import RequestData, Status
from rollup.payload_codec import (
    BalanceQuery,
    DecodedAction,
    Deposit,
    RequestKind,
    Settle,
    Transfer,
    decode,
    decode_hex_payload,
)


class ActionRouter:
    def __init__(self, ledger: Ledger, emitter: EventEmitter) -> None:
        self.ledger = ledger
        self.emitter = emitter

    def _report_failure(self, tag: str, err: Exception) -> None:
        log_error(tag, f"Error: {err}")
        try:
            self.emitter.report(f"Error: {err}")
        except HostUnavailable as e:
            log_error(tag, f"Error report not delivered: {e}")

    # ------------------------------------------------------------------ #
    # Advance (state-changing)
    # ------------------------------------------------------------------ #
    def handle_advance(self, data: RequestData) -> Status:
        sender: Optional[str] = data.metadata.msg_sender if data.metadata else None
        log("ADVANCE", f"Input received: sender={sender}, payload={data.payload}")

        # a rejected input must leave no trace in the ledger
        snapshot = self.ledger.snapshot()
        try:
            action = decode(decode_hex_payload(data.payload), RequestKind.ADVANCE)
            return self.dispatch_advance(action)
        except HostUnavailable as e:
            self.ledger.restore(snapshot)
            log_error("ADVANCE", f"Output failed, input rolled back: {e}")
            return "reject"
        except (LedgerError, ValueError) as e:
            self.ledger.restore(snapshot)
            self._report_failure("ADVANCE", e)
            return "reject"

    def dispatch_advance(self, action: DecodedAction) -> Status:
        if isinstance(action, Deposit):
            return self._deposit(action)
        if isinstance(action, Transfer):
            return self._transfer(action)
        if isinstance(action, Settle):
            return self._settle(action)

        log("ADVANCE", f"Unrecognized input: {action}")
        self.emitter.report("Unrecognized structure")
        return "accept"

    def _deposit(self, action: Deposit) -> Status:
        balance = self.ledger.credit(action.recipient, action.amount)
        log("DEPOSIT", f"{action.recipient} new balance = {balance} wei")
        self.emitter.notice(
            f"Deposit OK: recipient={action.recipient}, newBalance={balance}"
        )
        return "accept"

    def _transfer(self, action: Transfer) -> Status:
        self.ledger.transfer(action.sender, action.recipient, action.amount)
        log(
            "TRANSFER",
            f"{action.sender} -> {action.recipient}: {action.amount} wei",
        )
        self.emitter.notice(
            f"Transfer OK: from={action.sender}, to={action.recipient}, amount={action.amount}"
        )
        return "accept"

    def _settle(self, action: Settle) -> Status:
        amount = self.ledger.settle(action.loser, action.winner)
        if amount == 0:
            log("SETTLE", f"{action.loser} has no balance; nothing to pay {action.winner}")
            self.emitter.report(f"No balance to transfer from {action.loser}")
            return "accept"

        self.emitter.voucher(action.winner, amount)
        self.emitter.notice(f"Voucher issued: {action.winner} gets {amount}")
        return "accept"

    # ------------------------------------------------------------------ #
    # Inspect (read-only)
    # ------------------------------------------------------------------ #
    def handle_inspect(self, data: RequestData) -> Status:
        log("INSPECT", f"Query received: payload={data.payload}")
        try:
            action = decode(decode_hex_payload(data.payload), RequestKind.INSPECT)
        except LedgerError as e:
            self._report_failure("INSPECT", e)
            return "reject"

        if not isinstance(action, BalanceQuery):
            log("INSPECT", "Unknown action or missing user field")
            return "accept"

        balance = self.ledger.query(action.user)
        log("INSPECT", f"Balance query: user={action.user}, balance={balance} wei")
        try:
            self.emitter.report(f"Balance of {action.user} = {balance}")
        except HostUnavailable as e:
            log_error("INSPECT", f"Balance report not delivered: {e}")
            return "reject"
        return "accept"
