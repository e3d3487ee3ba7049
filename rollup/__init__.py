"""
Rollup Package

Contains:
- config: environment-driven settings
- log: tagged console logging
- models: pydantic shapes for the host wire protocol
- host_client: requests-based client for the rollup host
- emitter: notices, reports and vouchers
- payload_codec: raw payload -> decoded action
- action_router: decoded action -> ledger call -> events -> status
- request_loop: the /finish polling loop
"""
