"""Tests for create_app() wiring."""

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.application import create_app
from src.cl_common.errors import InvalidOracleAddressError
from src.cl_oracle.infrastructure.http_feed import HttpPriceFeed
from src.cl_oracle.infrastructure.static_feed import StaticPriceFeed


def test_unconfigured_oracle_fails_at_construction() -> None:
    with pytest.raises(InvalidOracleAddressError):
        create_app(config=Settings(JWT_SECRET="x", ORACLE_URL=""))


def test_oracle_url_builds_http_feed() -> None:
    app = create_app(config=Settings(JWT_SECRET="x", ORACLE_URL="http://oracle.test"))
    assert isinstance(app.state.oracle_gateway._feed, HttpPriceFeed)


def test_apps_do_not_share_ledger_state() -> None:
    a = create_app(feed=StaticPriceFeed(1))
    b = create_app(feed=StaticPriceFeed(1))
    assert a.state.ledger is not b.state.ledger
    assert a.state.catalog_service is not b.state.catalog_service


def test_heartbeat_from_settings() -> None:
    app = create_app(
        feed=StaticPriceFeed(1), config=Settings(JWT_SECRET="x", ORACLE_HEARTBEAT_SECONDS=60)
    )
    assert app.state.oracle_gateway.heartbeat_seconds == 60


async def test_unhandled_exception_returns_internal_error_envelope() -> None:
    app = create_app(feed=StaticPriceFeed(1))

    async def crash() -> None:
        raise RuntimeError("boom")

    app.add_api_route("/crash", crash)
    # ServerErrorMiddleware re-raises after responding; keep the response instead
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/crash")

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == 9002
    assert body["data"] is None
