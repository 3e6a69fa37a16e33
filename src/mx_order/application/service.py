"""Order application service: digest preview, status lookup, cancellation."""
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.database import unit_of_work
from src.mx_common.enums import OrderStatus
from src.mx_order.application.schemas import (
    CancelOrderResponse,
    DigestResponse,
    OfferOrderIn,
    OrderStatusResponse,
    SaleOrderIn,
)
from src.mx_order.domain.codec import digest_hex
from src.mx_settlement.application.service import get_settlement_engine


def compute_digest(order: SaleOrderIn | OfferOrderIn) -> DigestResponse:
    """Digest an off-ledger signer must sign; no state is read or written."""
    domain = order.to_domain()
    return DigestResponse(
        digest=digest_hex(domain), kind=domain.kind.value, signer=domain.signer
    )


async def get_status(digest: str, db: AsyncSession) -> OrderStatusResponse:
    status = await get_settlement_engine().get_order_status(digest.lower(), db)
    return OrderStatusResponse(digest=digest.lower(), status=status.value)


async def cancel_order(
    order: SaleOrderIn | OfferOrderIn, caller: str, db: AsyncSession
) -> CancelOrderResponse:
    async with unit_of_work(db):
        digest = await get_settlement_engine().cancel_order(order.to_domain(), caller, db)
    return CancelOrderResponse(digest=digest, status=OrderStatus.CANCELLED.value)
