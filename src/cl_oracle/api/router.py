"""cl_oracle REST API: the current validated rate, for observers and payers."""

from fastapi import APIRouter, Request

from src.cl_common.fixed_point import CANONICAL_PRECISION, format_fixed
from src.cl_common.response import ApiResponse, request_scoped_success
from src.cl_oracle.gateway import OracleGateway

router = APIRouter(prefix="/oracle", tags=["oracle"])


@router.get("/rate")
async def get_rate(request: Request) -> ApiResponse:
    gateway: OracleGateway = request.app.state.oracle_gateway
    rate = await gateway.fetch_validated_rate()
    return request_scoped_success(request, {
        "rate": rate,
        "rate_display": format_fixed(rate),
        "precision": CANONICAL_PRECISION,
        "feed_precision": await gateway.precision(),
        "heartbeat_seconds": gateway.heartbeat_seconds,
    })
