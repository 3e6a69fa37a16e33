"""Per-order verification rules, applied in settlement order."""
from src.mx_common.addresses import is_zero_address, same_address
from src.mx_common.errors import (
    ExpiredOrderError,
    InvalidAssetContractError,
    OfferSellerMismatchError,
    ReserveBuyerMismatchError,
)
from src.mx_order.domain.models import OfferOrder, Order, SaleOrder


def check_not_expired(order: Order, now: int) -> None:
    """Orders are valid strictly before expire_timestamp (unix seconds)."""
    if now >= order.expire_timestamp:
        raise ExpiredOrderError("offer" if order.kind.is_offer else "order")


def check_reserve_buyer(order: SaleOrder, buyer: str) -> None:
    """A set reserve buyer is the only account allowed to take the order."""
    if not is_zero_address(order.reserve_buyer) and not same_address(
        order.reserve_buyer, buyer
    ):
        raise ReserveBuyerMismatchError()


def check_offer_seller(order: OfferOrder, caller: str) -> None:
    """Only the seller named in the offer may accept it."""
    if not same_address(order.seller, caller):
        raise OfferSellerMismatchError()


def check_asset_contract(order: Order) -> None:
    if is_zero_address(order.asset_contract):
        raise InvalidAssetContractError()
