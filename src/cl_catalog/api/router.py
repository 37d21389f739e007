"""cl_catalog REST API: reads are public, mutations require the privileged caller."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.cl_catalog.application.schemas import (
    AddItemRequest,
    ItemDetail,
    ItemListResponse,
    UpdatePriceRequest,
)
from src.cl_catalog.application.service import CatalogService
from src.cl_common.response import ApiResponse, request_scoped_success
from src.cl_gateway.auth.dependencies import require_privileged_caller

router = APIRouter(prefix="/items", tags=["catalog"])


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service  # type: ignore[no-any-return]


@router.get("")
async def list_items(
    request: Request,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    include_deleted: bool = Query(False, description="Include tombstoned items"),
) -> ApiResponse:
    items = service.list_items(include_deleted=include_deleted)
    data = ItemListResponse(items=[ItemDetail.from_domain(i) for i in items])
    return request_scoped_success(request, data.model_dump())


@router.get("/{item_id}")
async def get_item(
    item_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    item = service.get_item(item_id)
    return request_scoped_success(request, ItemDetail.from_domain(item).model_dump())


@router.post("")
async def add_item(
    body: AddItemRequest,
    request: Request,
    _caller: Annotated[str, Depends(require_privileged_caller)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    item = await service.add_item(body.name, body.price_usd)
    return request_scoped_success(request, ItemDetail.from_domain(item).model_dump())


@router.put("/{item_id}/price")
async def update_price(
    item_id: int,
    body: UpdatePriceRequest,
    request: Request,
    _caller: Annotated[str, Depends(require_privileged_caller)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    item = await service.update_price(item_id, body.price_usd)
    return request_scoped_success(request, ItemDetail.from_domain(item).model_dump())


@router.delete("/{item_id}")
async def delete_item(
    item_id: int,
    request: Request,
    _caller: Annotated[str, Depends(require_privileged_caller)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    item = await service.delete_item(item_id)
    return request_scoped_success(request, ItemDetail.from_domain(item).model_dump())
