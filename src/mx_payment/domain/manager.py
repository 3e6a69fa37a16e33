"""PaymentManager: validates the payment token and executes the split transfer."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.addresses import is_zero_address
from src.mx_common.enums import LedgerEntryType
from src.mx_common.errors import (
    InsufficientAllowanceError,
    OfferNativePaymentError,
    UnsupportedPaymentTokenError,
)
from src.mx_marketplace.domain.models import MarketplaceConfig
from src.mx_order.domain.models import Order
from src.mx_payment.domain.split import PaymentSplit, split_payment
from src.mx_payment.domain.transport import PaymentTransport

logger = logging.getLogger(__name__)


class PaymentManager:
    def __init__(self, transport: PaymentTransport, operator: str) -> None:
        self._transport = transport
        # address token owners grant allowances to (the exchange itself)
        self._operator = operator

    async def validate(
        self,
        order: Order,
        payer: str,
        total: int,
        config: MarketplaceConfig,
        db: AsyncSession,
    ) -> None:
        """Raise unless payer can pay total in order.payment_token.

        Native currency is accepted for sale orders only; the attached value
        has already been matched against the batch total by the caller.
        """
        if is_zero_address(order.payment_token):
            if order.kind.is_offer:
                raise OfferNativePaymentError()
            return
        if not config.is_tradable(order.payment_token):
            raise UnsupportedPaymentTokenError()
        allowed = await self._transport.allowance(
            order.payment_token, payer, self._operator, db
        )
        if allowed < total:
            raise InsufficientAllowanceError(total, allowed)

    async def pay(
        self,
        order: Order,
        payer: str,
        split: PaymentSplit,
        config: MarketplaceConfig,
        reference_id: str,
        db: AsyncSession,
    ) -> None:
        """Fee -> fee address, royalty -> royalty receiver, remainder -> seller.

        Zero-amount legs are skipped. A failing leg raises and the caller's
        transaction discards the legs already applied.
        """
        legs = (
            (config.fee_address, split.fee, LedgerEntryType.FEE_REVENUE),
            (order.royalty_receiver, split.royalty, LedgerEntryType.ROYALTY_REVENUE),
            (order.seller, split.seller, LedgerEntryType.SALE_PROCEEDS),
        )
        native = is_zero_address(order.payment_token)
        for recipient, amount, entry_type in legs:
            if amount == 0:
                continue
            if native:
                await self._transport.transfer_native(
                    payer, recipient, amount, entry_type, reference_id, db
                )
            else:
                await self._transport.transfer_from(
                    order.payment_token,
                    payer,
                    self._operator,
                    recipient,
                    amount,
                    entry_type,
                    reference_id,
                    db,
                )

    async def settle(
        self,
        order: Order,
        payer: str,
        total: int,
        config: MarketplaceConfig,
        reference_id: str,
        db: AsyncSession,
    ) -> PaymentSplit:
        await self.validate(order, payer, total, config, db)
        split = split_payment(total, config.fee_bps, order.royalty_bps)
        await self.pay(order, payer, split, config, reference_id, db)
        logger.debug(
            "payment %s: total=%d fee=%d royalty=%d seller=%d",
            reference_id, total, split.fee, split.royalty, split.seller,
        )
        return split
