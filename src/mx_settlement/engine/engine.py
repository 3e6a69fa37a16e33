"""SettlementEngine: orchestrates verification, ledger transition, payment and asset movement.

Per order: Received -> Validated -> Authorized -> Settled, or Rejected at any
stage. Every public call runs inside one savepoint: a failure anywhere rolls
back the ledger rows, balance movements and events of the whole call.
"""
import logging
from collections.abc import Callable, Sequence
from typing import cast

from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.addresses import is_zero_address, same_address
from src.mx_common.datetime_utils import unix_now
from src.mx_common.enums import OrderKind, OrderStatus, SettlementEventType
from src.mx_common.errors import (
    AppError,
    AssetNotApprovedError,
    BatchShapeError,
    CallerMismatchError,
    OfferNativePaymentError,
)
from src.mx_asset.domain.adapter import AssetTransferAdapter
from src.mx_marketplace.domain.models import MarketplaceConfig
from src.mx_marketplace.domain.repository import MarketplaceConfigRepositoryProtocol
from src.mx_order.domain.authenticator import verify_signer
from src.mx_order.domain.codec import digest_hex
from src.mx_order.domain.models import OfferOrder, Order, SaleOrder, Signature
from src.mx_order.domain.repository import OrderLedgerProtocol
from src.mx_payment.domain.manager import PaymentManager
from src.mx_payment.domain.split import total_price
from src.mx_settlement.domain.models import SettlementReceipt
from src.mx_settlement.infrastructure.events import write_settlement_event
from src.mx_settlement.rules.batch_shape import check_attached_value, check_batch_shape
from src.mx_settlement.rules.order_validity import (
    check_asset_contract,
    check_not_expired,
    check_offer_seller,
    check_reserve_buyer,
)

logger = logging.getLogger(__name__)


class SettlementEngine:
    def __init__(
        self,
        config_repo: MarketplaceConfigRepositoryProtocol,
        ledger: OrderLedgerProtocol,
        payments: PaymentManager,
        assets: AssetTransferAdapter,
        operator: str,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self._config_repo = config_repo
        self._ledger = ledger
        self._payments = payments
        self._assets = assets
        # address sellers approve to move their assets (the exchange itself)
        self._operator = operator
        self._clock = clock

    # ------------------------------------------------------------------
    # Sale orders (buyer takes seller-signed listings)
    # ------------------------------------------------------------------

    async def submit_sale_orders(
        self,
        orders: Sequence[SaleOrder],
        signatures: Sequence[Signature],
        buy_quantities: Sequence[int] | None,
        caller: str,
        value: int,
        db: AsyncSession,
    ) -> list[SettlementReceipt]:
        """Settle a batch of sale orders for caller, all or nothing.

        value is the native currency the caller attaches; it must equal the
        summed total of the native-priced orders in the batch.
        """
        check_batch_shape(orders, signatures, buy_quantities)
        quantities = (
            list(buy_quantities)
            if orders[0].kind == OrderKind.MULTI_SALE and buy_quantities is not None
            else [o.quantity for o in orders]
        )
        totals = [total_price(o, q) for o, q in zip(orders, quantities)]
        native_total = sum(
            t for o, t in zip(orders, totals) if is_zero_address(o.payment_token)
        )
        check_attached_value(native_total, value)

        config = await self._config_repo.load(db)
        receipts: list[SettlementReceipt] = []
        try:
            async with db.begin_nested():
                for order, signature, qty, total in zip(orders, signatures, quantities, totals):
                    receipts.append(
                        await self._settle_sale(order, signature, qty, total, caller, config, db)
                    )
        except AppError as exc:
            logger.warning(
                "sale batch rejected: caller=%s size=%d code=%d reason=%s",
                caller, len(orders), exc.code, exc.message,
            )
            raise
        logger.info(
            "sale batch settled: caller=%s size=%d value=%d", caller, len(orders), value
        )
        return receipts

    async def _settle_sale(
        self,
        order: SaleOrder,
        signature: Signature,
        quantity: int,
        total: int,
        buyer: str,
        config: MarketplaceConfig,
        db: AsyncSession,
    ) -> SettlementReceipt:
        check_not_expired(order, self._clock())
        check_reserve_buyer(order, buyer)
        check_asset_contract(order)
        verify_signer(order, signature, order.seller, config.sign_prefixes)

        digest = digest_hex(order)
        await self._ledger.mark_fulfilled(digest, order.kind, db)
        split = await self._payments.settle(order, buyer, total, config, digest, db)
        await self._move_assets(order, order.seller, buyer, quantity, db)
        await write_settlement_event(
            SettlementEventType.ORDER_FULFILLED,
            digest,
            order.kind,
            buyer,
            {"seller": order.seller, "quantity": quantity, "total_price": total},
            db,
        )
        return SettlementReceipt(
            digest=digest,
            kind=order.kind,
            buyer=buyer,
            seller=order.seller,
            quantity=quantity,
            total_price=total,
            fee=split.fee,
            royalty=split.royalty,
            seller_proceeds=split.seller,
        )

    # ------------------------------------------------------------------
    # Offer orders (seller accepts a buyer-signed bid)
    # ------------------------------------------------------------------

    async def submit_offer(
        self,
        order: OfferOrder,
        signature: Signature,
        caller: str,
        db: AsyncSession,
    ) -> SettlementReceipt:
        """Accept a buyer's offer; caller must be the seller it names."""
        if not order.kind.is_offer:
            raise BatchShapeError("order must be an offer")
        # offers are always paid from a token allowance, never attached value
        if is_zero_address(order.payment_token):
            raise OfferNativePaymentError()

        config = await self._config_repo.load(db)
        try:
            async with db.begin_nested():
                check_not_expired(order, self._clock())
                check_offer_seller(order, caller)
                check_asset_contract(order)
                verify_signer(order, signature, order.buyer, config.sign_prefixes)

                digest = digest_hex(order)
                await self._ledger.mark_fulfilled(digest, order.kind, db)
                split = await self._payments.settle(
                    order, order.buyer, order.price, config, digest, db
                )
                await self._move_assets(order, order.seller, order.buyer, order.quantity, db)
                await write_settlement_event(
                    SettlementEventType.ORDER_FULFILLED,
                    digest,
                    order.kind,
                    caller,
                    {"buyer": order.buyer, "quantity": order.quantity, "total_price": order.price},
                    db,
                )
                receipt = SettlementReceipt(
                    digest=digest,
                    kind=order.kind,
                    buyer=order.buyer,
                    seller=order.seller,
                    quantity=order.quantity,
                    total_price=order.price,
                    fee=split.fee,
                    royalty=split.royalty,
                    seller_proceeds=split.seller,
                )
        except AppError as exc:
            logger.warning(
                "offer rejected: caller=%s code=%d reason=%s", caller, exc.code, exc.message
            )
            raise
        logger.info("offer settled: digest=%s seller=%s", receipt.digest, caller)
        return receipt

    # ------------------------------------------------------------------
    # Cancellation / status
    # ------------------------------------------------------------------

    async def cancel_order(self, order: Order, caller: str, db: AsyncSession) -> str:
        """Cancel an open order. Only its signer (seller of a sale, buyer of an offer) may."""
        if not same_address(caller, order.signer):
            raise CallerMismatchError("buyer" if order.kind.is_offer else "seller")
        digest = digest_hex(order)
        async with db.begin_nested():
            await self._ledger.mark_cancelled(digest, order.kind, db)
            await write_settlement_event(
                SettlementEventType.ORDER_CANCELLED, digest, order.kind, caller, {}, db
            )
        logger.info("order cancelled: digest=%s by=%s", digest, caller)
        return digest

    async def get_order_status(self, digest: str, db: AsyncSession) -> OrderStatus:
        return await self._ledger.get_status(digest, db)

    # ------------------------------------------------------------------
    # Asset movement
    # ------------------------------------------------------------------

    async def _move_assets(
        self, order: Order, sender: str, recipient: str, quantity: int, db: AsyncSession
    ) -> None:
        """Move the order's units sender -> recipient through the asset adapter."""
        if not await self._assets.is_approved_for_all(
            order.asset_contract, sender, self._operator, db
        ):
            raise AssetNotApprovedError(sender)
        for asset_id, units in _asset_legs(order, quantity):
            await self._assets.transfer(
                order.asset_contract, sender, recipient, asset_id, units, db
            )


def _asset_legs(order: Order, quantity: int) -> list[tuple[int, int]]:
    """(asset_id, units) pairs an order moves."""
    if order.kind.is_offer:
        return [(cast(OfferOrder, order).token_id, quantity)]
    sale = cast(SaleOrder, order)
    if sale.kind == OrderKind.UNIQUE_SALE:
        return [(token_id, 1) for token_id in sale.token_ids]
    if sale.kind == OrderKind.MULTI_SALE:
        return [(sale.token_ids[0], quantity)]
    return list(zip(sale.token_ids, sale.quantities))
