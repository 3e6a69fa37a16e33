"""Price and proceeds split: pure integer arithmetic.

fee     = total * fee_bps // 10000
royalty = (total - fee) * royalty_bps // 10000
seller  = total - fee - royalty

Floor division on both shares, the seller absorbs the rounding, so the three
legs always sum to total exactly.
"""
from dataclasses import dataclass

from src.mx_common.basis_points import apply_bps
from src.mx_common.enums import OrderKind
from src.mx_common.errors import BatchShapeError
from src.mx_order.domain.models import UINT256_MAX, Order


@dataclass(frozen=True)
class PaymentSplit:
    fee: int
    royalty: int
    seller: int

    @property
    def total(self) -> int:
        return self.fee + self.royalty + self.seller


def total_price(order: Order, buy_quantity: int = 1) -> int:
    """MULTI_SALE prices per unit; every other kind prices the whole order."""
    if order.kind != OrderKind.MULTI_SALE:
        return order.price
    total = order.price * buy_quantity
    if total > UINT256_MAX:
        raise BatchShapeError("total price overflows uint256")
    return total


def split_payment(total: int, fee_bps: int, royalty_bps: int) -> PaymentSplit:
    fee = apply_bps(total, fee_bps)
    royalty = apply_bps(total - fee, royalty_bps)
    return PaymentSplit(fee=fee, royalty=royalty, seller=total - fee - royalty)
