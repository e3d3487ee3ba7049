#!/usr/bin/env python3
"""
Rollup Ledger node entry point.

    ROLLUP_HTTP_SERVER_URL=http://localhost:5004 python -m rollup
"""

from __future__ import annotations
import sys

from ledger.errors import HostUnavailable
from rollup.config import load_config
from rollup.log import log, log_error
from rollup.request_loop import RequestLoop


def main() -> int:
    cfg = load_config()
    log("MAINLOOP", f"Rollup ledger node starting (strict_outputs={cfg.strict_outputs})")
    loop = RequestLoop.from_config(cfg)
    try:
        loop.run()
    except HostUnavailable as e:
        log_error("MAINLOOP", f"Rollup host unavailable: {e}")
        return 1
    except KeyboardInterrupt:
        log("MAINLOOP", "Interrupted; exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
