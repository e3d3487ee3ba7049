"""
Rollup host settings.

Everything comes from the environment; there are no CLI flags.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SERVER_URL = "http://localhost:5004"
DEFAULT_POLL_INTERVAL = 1.0


@dataclass
class RollupConfig:
    server_url: str = DEFAULT_SERVER_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    timeout: Optional[float] = None
    strict_outputs: bool = False


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


def load_config() -> RollupConfig:
    return RollupConfig(
        server_url=(os.getenv("ROLLUP_HTTP_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
        poll_interval=float(os.getenv("ROLLUP_POLL_INTERVAL") or DEFAULT_POLL_INTERVAL),
        timeout=_optional_float(os.getenv("ROLLUP_HTTP_TIMEOUT")),
        strict_outputs=os.getenv("ROLLUP_STRICT_OUTPUTS", "false").lower() == "true",
    )
