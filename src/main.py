"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000

ORACLE_URL must point at the price feed; startup fails with
InvalidOracleAddressError when it is empty.
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from src.application import create_app

app = create_app()
