"""Settlement application service: wires the engine to its SQL collaborators.

Each call commits on success and rolls the session back on any failure; the
engine's own savepoint already guarantees no partial settlement survives.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.mx_asset.infrastructure.custody import SqlAssetCustody
from src.mx_common.database import unit_of_work
from src.mx_marketplace.infrastructure.persistence import MarketplaceConfigRepository
from src.mx_order.infrastructure.persistence import OrderLedgerRepository
from src.mx_payment.domain.manager import PaymentManager
from src.mx_payment.infrastructure.transport import SqlPaymentTransport
from src.mx_settlement.application.schemas import (
    ReceiptResponse,
    SubmitOfferRequest,
    SubmitSalesRequest,
    SubmitSalesResponse,
)
from src.mx_settlement.engine.engine import SettlementEngine

_engine: SettlementEngine | None = None


def get_settlement_engine() -> SettlementEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        operator = settings.MARKETPLACE_ADDRESS
        _engine = SettlementEngine(
            config_repo=MarketplaceConfigRepository(),
            ledger=OrderLedgerRepository(),
            payments=PaymentManager(SqlPaymentTransport(), operator),
            assets=SqlAssetCustody(),
            operator=operator,
        )
    return _engine


async def submit_sales(
    req: SubmitSalesRequest, caller: str, db: AsyncSession
) -> SubmitSalesResponse:
    engine = get_settlement_engine()
    async with unit_of_work(db):
        receipts = await engine.submit_sale_orders(
            [o.to_domain() for o in req.orders],
            [s.to_domain() for s in req.signatures],
            req.buy_quantities,
            caller,
            req.value,
            db,
        )
    return SubmitSalesResponse(
        receipts=[ReceiptResponse.from_receipt(r) for r in receipts],
        value=req.value,
    )


async def submit_offer(
    req: SubmitOfferRequest, caller: str, db: AsyncSession
) -> ReceiptResponse:
    engine = get_settlement_engine()
    async with unit_of_work(db):
        receipt = await engine.submit_offer(
            req.order.to_domain(), req.signature.to_domain(), caller, db
        )
    return ReceiptResponse.from_receipt(receipt)
