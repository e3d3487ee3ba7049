"""
Rollup host HTTP client.

One request/response exchange per call:
- POST /finish  {status}               -> 200 RollupRequest | 202 nothing pending
- POST /notice  {payload}              -> ack
- POST /report  {payload}              -> ack
- POST /voucher {destination, payload} -> ack
"""

from __future__ import annotations
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from ledger.errors import HostUnavailable
from rollup.config import RollupConfig
from rollup.log import log
from rollup.models import FinishBody, RollupRequest, Status


class RollupHostClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cfg: RollupConfig) -> "RollupHostClient":
        return cls(cfg.server_url, timeout=cfg.timeout)

    def _post(self, path: str, body: Dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise HostUnavailable(f"POST {path} failed: {e}") from e

    def finish(self, status: Status) -> Optional[RollupRequest]:
        """
        Report the previous input's status and ask for the next one.
        Returns None when the host has nothing pending (202).
        """
        resp = self._post("/finish", FinishBody(status=status).model_dump())
        if resp.status_code == 202:
            return None
        if resp.status_code != 200:
            raise HostUnavailable(f"POST /finish failed: {resp.status_code} {resp.text}")
        try:
            return RollupRequest.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise HostUnavailable(f"POST /finish returned an unreadable request: {e}") from e

    def post_output(self, kind: str, body: Dict[str, Any]) -> requests.Response:
        resp = self._post(f"/{kind}", body)
        log("HOST", f"/{kind} -> {resp.status_code}")
        return resp
