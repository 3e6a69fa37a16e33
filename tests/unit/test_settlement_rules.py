"""Unit tests for batch-shape and per-order validity rules."""
import pytest

from src.mx_common.enums import OrderKind
from src.mx_common.errors import (
    BatchShapeError,
    ExpiredOrderError,
    InvalidAssetContractError,
    OfferSellerMismatchError,
    ReserveBuyerMismatchError,
    ValueMismatchError,
)
from src.mx_common.addresses import ZERO_ADDRESS
from src.mx_order.domain.models import Signature
from src.mx_settlement.rules.batch_shape import (
    check_attached_value,
    check_batch_shape,
    check_buy_quantity,
)
from src.mx_settlement.rules.order_validity import (
    check_asset_contract,
    check_not_expired,
    check_offer_seller,
    check_reserve_buyer,
)

from settlement_fakes import NOW, make_offer, make_sale

SELLER = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
BUYER = "0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2"
SIG = Signature(v=27, r=b"\x01" * 32, s=b"\x02" * 32)


def _multi(quantity: int = 5):
    return make_sale(SELLER, kind=OrderKind.MULTI_SALE, quantities=(quantity,))


class TestBatchShape:
    def test_empty_batch(self) -> None:
        with pytest.raises(BatchShapeError) as exc:
            check_batch_shape([], [], None)
        assert exc.value.message == "MarketplaceExchange: orders is require"
        assert exc.value.code == 2001

    def test_signature_count_mismatch(self) -> None:
        with pytest.raises(
            BatchShapeError, match="orders length must be equal signatures length$"
        ):
            check_batch_shape([make_sale(SELLER), make_sale(SELLER, salt=2)], [SIG], None)

    def test_multi_sale_requires_buy_quantities(self) -> None:
        with pytest.raises(BatchShapeError, match="buyQuantities length"):
            check_batch_shape([_multi()], [SIG], None)

    def test_multi_sale_buy_quantity_count(self) -> None:
        with pytest.raises(BatchShapeError, match="buyQuantities length"):
            check_batch_shape([_multi()], [SIG], [1, 2])

    def test_mixed_kinds_rejected(self) -> None:
        with pytest.raises(BatchShapeError, match="share one order kind"):
            check_batch_shape([make_sale(SELLER), _multi()], [SIG, SIG], [1, 1])

    def test_valid_multi_batch(self) -> None:
        check_batch_shape([_multi(5), _multi(3)], [SIG, SIG], [5, 1])

    @pytest.mark.parametrize("qty", [0, 6, -1])
    def test_buy_quantity_out_of_range(self, qty: int) -> None:
        with pytest.raises(BatchShapeError, match="invalid buy quantity"):
            check_buy_quantity(_multi(5), qty)


class TestAttachedValue:
    def test_exact_match(self) -> None:
        check_attached_value(100, 100)

    @pytest.mark.parametrize("native_total,value", [(100, 99), (100, 101), (0, 1)])
    def test_mismatch(self, native_total: int, value: int) -> None:
        with pytest.raises(ValueMismatchError, match="value is not matched"):
            check_attached_value(native_total, value)

    def test_total_above_uint256(self) -> None:
        with pytest.raises(BatchShapeError, match="overflows uint256"):
            check_attached_value(2**256, 2**256)


class TestOrderValidity:
    def test_valid_strictly_before_expiry(self) -> None:
        check_not_expired(make_sale(SELLER, expire_timestamp=NOW + 1), NOW)
        with pytest.raises(ExpiredOrderError, match="already expired order"):
            check_not_expired(make_sale(SELLER, expire_timestamp=NOW), NOW)

    def test_expired_offer_message(self) -> None:
        with pytest.raises(ExpiredOrderError, match="already expired offer"):
            check_not_expired(make_offer(SELLER, BUYER, expire_timestamp=NOW - 1), NOW)

    def test_reserve_buyer(self) -> None:
        order = make_sale(SELLER, reserve_buyer=BUYER)
        check_reserve_buyer(order, BUYER.lower())
        with pytest.raises(ReserveBuyerMismatchError):
            check_reserve_buyer(order, SELLER)

    def test_unreserved_order_open_to_anyone(self) -> None:
        check_reserve_buyer(make_sale(SELLER), BUYER)

    def test_offer_seller_must_be_caller(self) -> None:
        order = make_offer(SELLER, BUYER)
        check_offer_seller(order, SELLER)
        with pytest.raises(OfferSellerMismatchError):
            check_offer_seller(order, BUYER)

    def test_zero_asset_contract(self) -> None:
        with pytest.raises(InvalidAssetContractError, match="must be not zero"):
            check_asset_contract(make_sale(SELLER, asset_contract=ZERO_ADDRESS))
