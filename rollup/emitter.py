"""
Event Emitter

Sends the three rollup outputs to the host:
- notice:  state-committing, provable event
- report:  diagnostic, never provable
- voucher: payout instruction for an address, amount as 32-byte uint256

A failed output is logged and dropped, unless strict mode is on, in which case
it raises HostUnavailable so the caller can abort the current input.
"""

from __future__ import annotations
from typing import Any, Dict

from eth_utils import encode_hex

from ledger.errors import HostUnavailable
from rollup.host_client import RollupHostClient
from rollup.log import log, log_error
from rollup.models import OutputBody, VoucherBody
from rollup.payload_codec import encode_text_payload, encode_voucher_amount


class EventEmitter:
    def __init__(self, client: RollupHostClient, *, strict: bool = False) -> None:
        self.client = client
        self.strict = strict

    def _send(self, kind: str, body: Dict[str, Any]) -> bool:
        try:
            resp = self.client.post_output(kind, body)
        except HostUnavailable as e:
            if self.strict:
                raise
            log_error(kind.upper(), f"Not delivered: {e}")
            return False

        if resp.status_code >= 400:
            msg = f"/{kind} rejected: {resp.status_code} {resp.text}"
            if self.strict:
                raise HostUnavailable(msg)
            log_error(kind.upper(), msg)
            return False
        return True

    def notice(self, message: str) -> bool:
        payload = encode_text_payload(message)
        ok = self._send("notice", OutputBody(payload=payload).model_dump())
        if ok:
            log("NOTICE", f"Sent: {message}")
        return ok

    def report(self, message: str) -> bool:
        payload = encode_text_payload(message)
        ok = self._send("report", OutputBody(payload=payload).model_dump())
        if ok:
            log("REPORT", f"Sent: {message}")
        return ok

    def voucher(self, destination: str, amount: int) -> bool:
        payload = encode_hex(encode_voucher_amount(amount))
        body = VoucherBody(destination=destination, payload=payload)
        ok = self._send("voucher", body.model_dump())
        if ok:
            log("VOUCHER", f"Sent: destination={destination}, amount={amount}")
        return ok
