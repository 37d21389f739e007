"""Integration-test fixtures.

Each test gets its own application instance (own store, journal and account)
built by create_app() around an in-process feed; no external services needed.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.application import create_app
from src.cl_gateway.auth.jwt_handler import create_access_token
from src.cl_oracle.infrastructure.static_feed import StaticPriceFeed
from src.cl_settlement.infrastructure.account import InMemorySettlementAccount


@pytest.fixture
def feed() -> StaticPriceFeed:
    # $2000 per settlement unit, as an 8-decimal feed reports it
    return StaticPriceFeed(2000 * 10**8, precision=8)


@pytest.fixture
def account() -> InMemorySettlementAccount:
    return InMemorySettlementAccount()


@pytest.fixture
async def client(feed: StaticPriceFeed, account: InMemorySettlementAccount) -> AsyncIterator[AsyncClient]:
    app = create_app(feed=feed, account=account)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(settings.OWNER_ID)}"}


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('alice')}"}
