"""
Request Loop

Drives the application: send the previous status to /finish, get the next
input, route it, remember the status for the next /finish.

- first /finish always sends "accept"
- 202 (nothing pending) -> wait poll_interval, retry with the same status
- unknown request_type  -> logged, previous status is kept

The loop runs until the process is killed, or until the optional stop event
is set (checked at the top of every iteration).
"""

from __future__ import annotations
import threading
import time
from typing import Callable, Optional

from ledger.balance_ledger import Ledger
from rollup.action_router import ActionRouter
from rollup.config import RollupConfig
from rollup.emitter import EventEmitter
from rollup.host_client import RollupHostClient
from rollup.log import log
from rollup.models import ADVANCE_STATE, INSPECT_STATE, Status


class RequestLoop:
    def __init__(
        self,
        client: RollupHostClient,
        router: ActionRouter,
        *,
        poll_interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.router = router
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.status: Status = "accept"

    @classmethod
    def from_config(cls, cfg: RollupConfig, ledger: Optional[Ledger] = None) -> "RequestLoop":
        client = RollupHostClient.from_config(cfg)
        emitter = EventEmitter(client, strict=cfg.strict_outputs)
        router = ActionRouter(ledger if ledger is not None else Ledger(), emitter)
        return cls(client, router, poll_interval=cfg.poll_interval)

    @property
    def ledger(self) -> Ledger:
        return self.router.ledger

    def step(self) -> bool:
        """
        One /finish exchange. Returns False when the host had nothing pending.
        """
        request = self.client.finish(self.status)
        if request is None:
            log("MAINLOOP", f"No pending requests, retry in {self.poll_interval}s...")
            self.sleep(self.poll_interval)
            return False

        log("MAINLOOP", f"Received request_type={request.request_type}")
        if request.request_type == ADVANCE_STATE:
            self.status = self.router.handle_advance(request.data)
        elif request.request_type == INSPECT_STATE:
            self.status = self.router.handle_inspect(request.data)
        else:
            log("MAINLOOP", f"Unknown request_type={request.request_type}")
        return True

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        log("MAINLOOP", f"Listening for rollup requests at: {self.client.base_url}")
        while stop_event is None or not stop_event.is_set():
            self.step()
