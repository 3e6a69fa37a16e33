"""Admin REST API. Every route requires an operator token (role = admin)."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_admin.application.service import AdminService
from src.mx_common.database import get_db_session
from src.mx_common.enums import SignScheme
from src.mx_common.response import ApiResponse, success_response
from src.mx_gateway.auth.dependencies import require_admin
from src.mx_order.domain.models import UINT256_MAX

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])
_service = AdminService()


class FeeAddressRequest(BaseModel):
    fee_address: str


class FeeBpsRequest(BaseModel):
    fee_bps: int


class TradableTokenRequest(BaseModel):
    enabled: bool = True


class SignPrefixRequest(BaseModel):
    prefix: str = Field(..., min_length=1)


class NativeCreditRequest(BaseModel):
    account: str
    amount: int = Field(..., gt=0, le=UINT256_MAX)


class TokenCreditRequest(BaseModel):
    token: str
    account: str
    amount: int = Field(..., gt=0, le=UINT256_MAX)


class AssetCreditRequest(BaseModel):
    asset_contract: str
    account: str
    asset_id: int = Field(..., ge=0, le=UINT256_MAX)
    quantity: int = Field(..., gt=0, le=UINT256_MAX)


@router.get("/config", response_model=ApiResponse)
async def get_config(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.get_config(db), request)


@router.put("/fee-address", response_model=ApiResponse)
async def set_fee_address(
    request: Request,
    body: FeeAddressRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.set_fee_address(body.fee_address, db), request)


@router.put("/fee-bps", response_model=ApiResponse)
async def set_fee_bps(
    request: Request,
    body: FeeBpsRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.set_fee_bps(body.fee_bps, db), request)


@router.put("/tradable-tokens/{token}", response_model=ApiResponse)
async def set_tradable_token(
    request: Request,
    token: str,
    body: TradableTokenRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.set_tradable_token(token, body.enabled, db)
    return success_response(result, request)


@router.put("/sign-prefixes/{scheme}", response_model=ApiResponse)
async def set_sign_prefix(
    request: Request,
    scheme: SignScheme,
    body: SignPrefixRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.set_sign_prefix(scheme, body.prefix, db), request)


@router.post("/custody/native", response_model=ApiResponse)
async def credit_native(
    request: Request,
    body: NativeCreditRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(
        await _service.credit_native(body.account, body.amount, db), request
    )


@router.post("/custody/tokens", response_model=ApiResponse)
async def credit_token(
    request: Request,
    body: TokenCreditRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(
        await _service.credit_token(body.token, body.account, body.amount, db), request
    )


@router.post("/custody/assets", response_model=ApiResponse)
async def credit_asset(
    request: Request,
    body: AssetCreditRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.credit_asset(
        body.asset_contract, body.account, body.asset_id, body.quantity, db
    )
    return success_response(result, request)
