"""Batch-level checks: run before any ledger state is touched."""
from collections.abc import Sequence

from src.mx_common.enums import OrderKind
from src.mx_common.errors import BatchShapeError, ValueMismatchError
from src.mx_order.domain.models import UINT256_MAX, SaleOrder, Signature


def check_batch_shape(
    orders: Sequence[SaleOrder],
    signatures: Sequence[Signature],
    buy_quantities: Sequence[int] | None,
) -> None:
    """Raise BatchShapeError unless orders/signatures(/buy_quantities) line up.

    buy_quantities is required exactly when the batch holds MULTI_SALE orders.
    """
    if not orders:
        raise BatchShapeError("orders is require")
    kinds = {o.kind for o in orders}
    if len(kinds) != 1:
        raise BatchShapeError("orders must share one order kind")
    if kinds == {OrderKind.MULTI_SALE}:
        if (
            buy_quantities is None
            or len(orders) != len(signatures)
            or len(orders) != len(buy_quantities)
        ):
            raise BatchShapeError(
                "orders length must be equal signatures length and buyQuantities length"
            )
        for order, qty in zip(orders, buy_quantities):
            check_buy_quantity(order, qty)
        return
    if len(orders) != len(signatures):
        raise BatchShapeError("orders length must be equal signatures length")


def check_buy_quantity(order: SaleOrder, buy_quantity: int) -> None:
    """Partial takes are allowed within one order: 1 <= buy_quantity <= order.quantity."""
    if not (1 <= buy_quantity <= order.quantity):
        raise BatchShapeError("invalid buy quantity")


def check_attached_value(native_total: int, value: int) -> None:
    """Attached native value must equal the summed native-priced orders exactly."""
    if native_total > UINT256_MAX:
        raise BatchShapeError("total price overflows uint256")
    if native_total != value:
        raise ValueMismatchError()
