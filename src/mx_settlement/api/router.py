from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.database import get_db_session
from src.mx_common.response import ApiResponse, success_response
from src.mx_gateway.auth.dependencies import get_caller_address
from src.mx_settlement.application import service as svc
from src.mx_settlement.application.schemas import SubmitOfferRequest, SubmitSalesRequest

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post("/sales", response_model=ApiResponse)
async def submit_sales(
    request: Request,
    body: SubmitSalesRequest,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    """Buy one or more listed orders; the caller is the buyer and payer."""
    data = await svc.submit_sales(body, caller, db)
    return success_response(data.model_dump(), request)


@router.post("/offers", response_model=ApiResponse)
async def submit_offer(
    request: Request,
    body: SubmitOfferRequest,
    caller: Annotated[str, Depends(get_caller_address)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    """Accept a buyer's offer; the caller must be the seller it names."""
    data = await svc.submit_offer(body, caller, db)
    return success_response(data.model_dump(), request)
