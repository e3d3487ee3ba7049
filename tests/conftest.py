from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from ledger.balance_ledger import Ledger
from rollup.action_router import ActionRouter
from rollup.emitter import EventEmitter
from rollup.host_client import RollupHostClient

HOST_URL = "http://rollup.test:5004"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = "" if body is None else str(body)

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


class FakeSession:
    """Stands in for requests.Session; records every POST made to the host."""

    def __init__(self, finish_responses: Optional[List[FakeResponse]] = None) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.finish_responses = list(finish_responses or [])
        self.output_status = 200
        self.output_error: Optional[Exception] = None

    def post(self, url: str, json: Dict[str, Any] = None, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append((url, json))
        path = url[len(HOST_URL):]
        if path == "/finish":
            if self.finish_responses:
                return self.finish_responses.pop(0)
            return FakeResponse(202)
        if self.output_error is not None:
            raise self.output_error
        return FakeResponse(self.output_status)

    def bodies(self, path: str) -> List[Dict[str, Any]]:
        return [body for url, body in self.calls if url == f"{HOST_URL}{path}"]

    def texts(self, path: str) -> List[str]:
        return [decode_text(body["payload"]) for body in self.bodies(path)]


def decode_text(payload: str) -> str:
    return bytes.fromhex(payload[2:]).decode("utf-8")


def encode_payload(raw: bytes) -> str:
    return "0x" + raw.hex()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> RollupHostClient:
    return RollupHostClient(HOST_URL, session=session)


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def emitter(client: RollupHostClient) -> EventEmitter:
    return EventEmitter(client)


@pytest.fixture
def router(ledger: Ledger, emitter: EventEmitter) -> ActionRouter:
    return ActionRouter(ledger, emitter)
