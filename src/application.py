"""Application factory.

create_app() builds one independent ledger (store, oracle gateway, pricing,
settlement) per application instance; tests pass their own feed and account.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import Settings, settings
from src.cl_catalog.api.router import router as catalog_router
from src.cl_catalog.application.service import CatalogService
from src.cl_common.errors import AppError, InternalError
from src.cl_common.response import error_response
from src.cl_gateway.middleware.request_log import RequestLogMiddleware
from src.cl_oracle.api.router import router as oracle_router
from src.cl_oracle.domain.feed import PriceFeedProtocol
from src.cl_oracle.gateway import OracleGateway
from src.cl_oracle.infrastructure.http_feed import HttpPriceFeed
from src.cl_pricing.engine import PricingEngine
from src.cl_settlement.api.router import router as settlement_router
from src.cl_settlement.application.service import SettlementApplicationService
from src.cl_settlement.domain.store import LedgerStore
from src.cl_settlement.engine.ledger import SettlementLedger
from src.cl_settlement.infrastructure.account import InMemorySettlementAccount
from src.cl_settlement.infrastructure.journal import EventJournal

logger = logging.getLogger(__name__)


def create_app(
    feed: PriceFeedProtocol | None = None,
    account: InMemorySettlementAccount | None = None,
    config: Settings = settings,
) -> FastAPI:
    owned_feed: HttpPriceFeed | None = None
    if feed is None:
        # Raises InvalidOracleAddressError when ORACLE_URL is empty
        owned_feed = HttpPriceFeed(config.ORACLE_URL, timeout=config.ORACLE_TIMEOUT_SECONDS)
        feed = owned_feed
    account = account or InMemorySettlementAccount()

    store = LedgerStore()
    journal = EventJournal()
    gateway = OracleGateway(feed, heartbeat_seconds=config.ORACLE_HEARTBEAT_SECONDS)
    ledger = SettlementLedger(
        store,
        PricingEngine(gateway),
        account,
        journal,
        credit_full_payment=config.CREDIT_FULL_PAYMENT,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Shutdown: close the HTTP feed client if this app created it."""
        yield
        if owned_feed is not None:
            await owned_feed.aclose()

    app = FastAPI(
        title=config.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
        debug=config.DEBUG,
    )

    app.state.oracle_gateway = gateway
    app.state.ledger = ledger
    app.state.account = account
    app.state.catalog_service = CatalogService(store, journal)
    app.state.settlement_service = SettlementApplicationService(ledger, account, journal)

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        resp = error_response(exc.code, exc.message)
        resp.request_id = getattr(request.state, "request_id", resp.request_id)
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path,
            exc_info=exc,
        )
        return await app_error_handler(request, InternalError())

    app.include_router(catalog_router, prefix="/api/v1")
    app.include_router(settlement_router, prefix="/api/v1")
    app.include_router(oracle_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": "0.1.0"}

    logger.info("Ledger app created (heartbeat=%ds)", config.ORACLE_HEARTBEAT_SECONDS)
    return app
