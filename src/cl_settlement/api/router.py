"""cl_settlement REST API: pricing, purchases, custodied balance and events."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.cl_common.response import ApiResponse, request_scoped_success
from src.cl_gateway.auth.dependencies import get_current_caller, require_privileged_caller
from src.cl_settlement.application.schemas import (
    PurchaseRequest,
    TransferRequest,
    WithdrawRequest,
)
from src.cl_settlement.application.service import SettlementApplicationService

router = APIRouter(tags=["settlement"])


def get_settlement_service(request: Request) -> SettlementApplicationService:
    return request.app.state.settlement_service  # type: ignore[no-any-return]


Service = Annotated[SettlementApplicationService, Depends(get_settlement_service)]


@router.get("/items/{item_id}/amount-owed")
async def amount_owed(item_id: int, request: Request, service: Service) -> ApiResponse:
    data = await service.amount_owed(item_id)
    return request_scoped_success(request, data.model_dump())


@router.post("/purchases")
async def purchase(
    body: PurchaseRequest,
    request: Request,
    payer: Annotated[str, Depends(get_current_caller)],
    service: Service,
) -> ApiResponse:
    data = await service.purchase(body.item_id, body.paid_amount, payer)
    return request_scoped_success(request, data.model_dump())


@router.get("/ledger/balance")
async def get_balance(request: Request, service: Service) -> ApiResponse:
    return request_scoped_success(request, service.get_balance().model_dump())


@router.post("/ledger/withdraw")
async def withdraw(
    body: WithdrawRequest,
    request: Request,
    caller: Annotated[str, Depends(require_privileged_caller)],
    service: Service,
) -> ApiResponse:
    data = await service.withdraw(body.amount, caller)
    return request_scoped_success(request, data.model_dump())


@router.post("/ledger/transfer")
async def transfer(
    body: TransferRequest,
    request: Request,
    _caller: Annotated[str, Depends(require_privileged_caller)],
    service: Service,
) -> ApiResponse:
    data = await service.transfer_to(body.recipient, body.amount)
    return request_scoped_success(request, data.model_dump())


@router.get("/events")
async def list_events(
    request: Request,
    service: Service,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(50, ge=1, le=500, description="Items per page"),
) -> ApiResponse:
    data = service.list_events(cursor, limit)
    return request_scoped_success(request, data.model_dump())
