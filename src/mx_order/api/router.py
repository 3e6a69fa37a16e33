from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.database import get_db_session
from src.mx_common.response import ApiResponse, success_response
from src.mx_gateway.auth.dependencies import get_caller_address
from src.mx_order.application import service as svc
from src.mx_order.application.schemas import OrderBody

router = APIRouter(prefix="/orders", tags=["orders"])

_DIGEST_PATTERN = r"^0x[0-9a-fA-F]{64}$"


@router.post("/digest", response_model=ApiResponse)
async def order_digest(request: Request, body: OrderBody) -> ApiResponse:
    data = svc.compute_digest(body.order)
    return success_response(data.model_dump(), request)


@router.post("/cancel", response_model=ApiResponse)
async def cancel_order(
    request: Request,
    body: OrderBody,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await svc.cancel_order(body.order, caller, db)
    return success_response(data.model_dump(), request)


@router.get("/{digest}/status", response_model=ApiResponse)
async def order_status(
    request: Request,
    digest: Annotated[str, Path(pattern=_DIGEST_PATTERN)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await svc.get_status(digest, db)
    return success_response(data.model_dump(), request)
