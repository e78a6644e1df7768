"""Tests for auc_bid.domain.rules — placement validation order and edges."""

import pytest

from src.auc_bid.domain.rules import (
    check_price_granularity,
    normalize_bidder_name,
    validate_bid,
)
from src.auc_common.errors import (
    BidTooHighError,
    BidTooLowError,
    InvalidPriceGranularityError,
    InvalidQuantityError,
    MissingBidderNameError,
)
from tests.unit.factories import make_lot

STEP = 10
CEILING = 2_000_000_000


def _validate(lot, price, units=1, name="alice"):
    return validate_bid(lot, price, units, name, step=STEP, ceiling=CEILING)


class TestPriceGranularity:
    def test_multiple_of_step_passes(self) -> None:
        check_price_granularity(120, STEP)

    @pytest.mark.parametrize("price", [0, -10, 125])
    def test_rejected(self, price: int) -> None:
        with pytest.raises(InvalidPriceGranularityError):
            check_price_granularity(price, STEP)


class TestValidateBid:
    def test_returns_trimmed_name(self) -> None:
        assert _validate(make_lot(current_bid=100), 110, name="  bob  ") == "bob"

    def test_equal_to_current_is_too_low(self) -> None:
        with pytest.raises(BidTooLowError):
            _validate(make_lot(current_bid=130), 130)

    def test_below_current_is_too_low(self) -> None:
        with pytest.raises(BidTooLowError):
            _validate(make_lot(current_bid=130), 120)

    def test_first_bid_must_exceed_starting_price(self) -> None:
        with pytest.raises(BidTooLowError):
            _validate(make_lot(starting_price=100, current_bid=100), 100)

    def test_granularity_checked_before_monotonicity(self) -> None:
        with pytest.raises(InvalidPriceGranularityError):
            _validate(make_lot(current_bid=130), 125)

    def test_ceiling(self) -> None:
        with pytest.raises(BidTooHighError):
            _validate(make_lot(current_bid=100), CEILING + STEP)

    def test_ceiling_itself_is_allowed(self) -> None:
        _validate(make_lot(current_bid=100), CEILING)

    @pytest.mark.parametrize("units", [0, 3])
    def test_units_out_of_range(self, units: int) -> None:
        with pytest.raises(InvalidQuantityError):
            _validate(make_lot(current_bid=100, unit_quantity=2), 110, units=units)

    def test_units_up_to_quantity(self) -> None:
        _validate(make_lot(current_bid=100, unit_quantity=2), 110, units=2)

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name(self, name) -> None:
        with pytest.raises(MissingBidderNameError):
            _validate(make_lot(current_bid=100), 110, name=name)


class TestNormalizeBidderName:
    def test_keeps_inner_spaces(self) -> None:
        assert normalize_bidder_name(" Jane  Doe ") == "Jane  Doe"
