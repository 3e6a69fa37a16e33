"""Owner custody actions on held assets."""
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from pydantic import BaseModel, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.mx_asset.infrastructure.custody import SqlAssetCustody
from src.mx_common.addresses import normalize_address
from src.mx_common.database import get_db_session
from src.mx_common.response import ApiResponse, success_response
from src.mx_gateway.auth.dependencies import get_caller_address
from src.mx_order.domain.models import UINT256_MAX

router = APIRouter(prefix="/custody", tags=["custody"])
_custody = SqlAssetCustody()


class ApprovalRequest(BaseModel):
    asset_contract: str
    approved: bool = True

    @field_validator("asset_contract")
    @classmethod
    def checksum_contract(cls, v: str) -> str:
        return normalize_address(v)


@router.post("/approvals", response_model=ApiResponse)
async def set_approval_for_all(
    request: Request,
    body: ApprovalRequest,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    """Let (or stop) the exchange move every asset the caller holds in a contract."""
    operator = settings.MARKETPLACE_ADDRESS
    async with db.begin():
        await _custody.set_approval_for_all(
            body.asset_contract, caller, operator, body.approved, db
        )
    return success_response(
        {
            "asset_contract": body.asset_contract,
            "owner": caller,
            "operator": operator,
            "approved": body.approved,
        },
        request,
    )


@router.get("/balances/assets/{asset_contract}/{asset_id}")
async def get_asset_balance(
    request: Request,
    asset_contract: str,
    asset_id: Annotated[int, Path(ge=0, le=UINT256_MAX)],
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    """Units of one asset the caller holds in custody."""
    asset_contract = normalize_address(asset_contract)
    quantity = await _custody.balance_of(asset_contract, caller, asset_id, db)
    return success_response(
        {
            "asset_contract": asset_contract,
            "asset_id": asset_id,
            "owner": caller,
            "quantity": quantity,
        },
        request,
    )
