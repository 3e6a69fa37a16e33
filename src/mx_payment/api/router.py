"""Owner custody actions on payment tokens."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.mx_common.addresses import normalize_address
from src.mx_common.database import get_db_session
from src.mx_common.response import ApiResponse, success_response
from src.mx_gateway.auth.dependencies import get_caller_address
from src.mx_order.domain.models import UINT256_MAX
from src.mx_payment.infrastructure.transport import SqlPaymentTransport

router = APIRouter(prefix="/custody", tags=["custody"])
_transport = SqlPaymentTransport()


class AllowanceRequest(BaseModel):
    token: str
    amount: int = Field(..., ge=0, le=UINT256_MAX)

    @field_validator("token")
    @classmethod
    def checksum_token(cls, v: str) -> str:
        return normalize_address(v)


@router.post("/allowances", response_model=ApiResponse)
async def approve_allowance(
    request: Request,
    body: AllowanceRequest,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    """Set how much of token the exchange may pull from the caller (overwrites)."""
    spender = settings.MARKETPLACE_ADDRESS
    async with db.begin():
        await _transport.approve(body.token, caller, spender, body.amount, db)
    return success_response(
        {"token": body.token, "owner": caller, "spender": spender, "amount": body.amount},
        request,
    )


@router.get("/balances/native")
async def get_native_balance(
    request: Request,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    balance = await _transport.native_balance_of(caller, db)
    return success_response({"account": caller, "balance": balance}, request)


@router.get("/balances/tokens/{token}")
async def get_token_balance(
    request: Request,
    token: str,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    token = normalize_address(token)
    balance = await _transport.token_balance_of(token, caller, db)
    return success_response({"token": token, "account": caller, "balance": balance}, request)
