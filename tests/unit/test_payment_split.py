"""Unit tests for total price and fee / royalty / seller split arithmetic."""
import pytest

from src.mx_common.basis_points import apply_bps, validate_bps
from src.mx_common.enums import OrderKind
from src.mx_common.errors import BatchShapeError, InvalidBasisPointsError
from src.mx_payment.domain.split import split_payment, total_price

from settlement_fakes import make_offer, make_sale

SELLER = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"


class TestTotalPrice:
    def test_multi_sale_is_unit_price_times_quantity(self) -> None:
        order = make_sale(SELLER, kind=OrderKind.MULTI_SALE, quantities=(10,), price=25)
        assert total_price(order, 5) == 125

    def test_bundle_price_ignores_quantity(self) -> None:
        order = make_sale(
            SELLER, kind=OrderKind.MULTI_BUNDLE_SALE, token_ids=(1, 2), quantities=(3, 4), price=90
        )
        assert total_price(order, 1) == 90

    def test_multi_offer_price_is_total(self) -> None:
        order = make_offer(SELLER, SELLER, kind=OrderKind.MULTI_OFFER, quantity=4, price=80)
        assert total_price(order) == 80

    def test_multi_sale_total_overflow(self) -> None:
        order = make_sale(SELLER, kind=OrderKind.MULTI_SALE, quantities=(10,), price=2**255)
        assert total_price(order, 1) == 2**255
        with pytest.raises(BatchShapeError, match="total price overflows uint256"):
            total_price(order, 4)


class TestSplit:
    def test_small_amount_rounds_down(self) -> None:
        split = split_payment(10, fee_bps=1000, royalty_bps=1000)
        assert (split.fee, split.royalty, split.seller) == (1, 0, 9)

    def test_royalty_applies_after_fee(self) -> None:
        split = split_payment(10_000, fee_bps=250, royalty_bps=1000)
        assert split.fee == 250
        assert split.royalty == 975
        assert split.seller == 8775

    def test_zero_rates(self) -> None:
        split = split_payment(777, 0, 0)
        assert (split.fee, split.royalty, split.seller) == (0, 0, 777)

    def test_full_fee_leaves_nothing(self) -> None:
        split = split_payment(500, 10_000, 5000)
        assert (split.fee, split.royalty, split.seller) == (500, 0, 0)

    @pytest.mark.parametrize(
        "total,fee_bps,royalty_bps",
        [(1, 9999, 9999), (3, 3333, 3333), (10**30 + 7, 123, 4567), (999, 1, 10_000)],
    )
    def test_legs_always_sum_to_total(self, total: int, fee_bps: int, royalty_bps: int) -> None:
        split = split_payment(total, fee_bps, royalty_bps)
        assert split.total == total
        assert min(split.fee, split.royalty, split.seller) >= 0


class TestBasisPoints:
    def test_apply_floors(self) -> None:
        assert apply_bps(19, 500) == 0
        assert apply_bps(20, 500) == 1

    @pytest.mark.parametrize("bps", [-1, 10_001])
    def test_out_of_range(self, bps: int) -> None:
        with pytest.raises(InvalidBasisPointsError):
            validate_bps(bps)

    @pytest.mark.parametrize("bps", [0, 10_000])
    def test_bounds_accepted(self, bps: int) -> None:
        validate_bps(bps)
