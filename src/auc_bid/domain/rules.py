"""Bid placement checks, run after the lot is known to exist and be open.

Checked in this order; the first failure wins:
  1. price is a positive multiple of the step     -> InvalidPriceGranularityError
  2. price > lot.current_bid                       -> BidTooLowError
  3. price <= ceiling                              -> BidTooHighError
  4. 1 <= units <= lot.unit_quantity               -> InvalidQuantityError
  5. bidder name non-blank                         -> MissingBidderNameError
"""

from src.auc_common.errors import (
    BidTooHighError,
    BidTooLowError,
    InvalidPriceGranularityError,
    InvalidQuantityError,
    MissingBidderNameError,
)
from src.auc_lot.domain.models import Lot


def check_price_granularity(price: int, step: int) -> None:
    if price <= 0 or price % step != 0:
        raise InvalidPriceGranularityError(price, step)


def check_above_current(price: int, current_bid: int) -> None:
    if price <= current_bid:
        raise BidTooLowError(price)


def check_price_ceiling(price: int, ceiling: int) -> None:
    if price > ceiling:
        raise BidTooHighError(price, ceiling)


def check_units(units: int, unit_quantity: int) -> None:
    if not (1 <= units <= unit_quantity):
        raise InvalidQuantityError(units, unit_quantity)


def normalize_bidder_name(name: str | None) -> str:
    """Return the trimmed name, or raise if nothing is left."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise MissingBidderNameError()
    return trimmed


def validate_bid(
    lot: Lot,
    price: int,
    units: int,
    bidder_name: str | None,
    *,
    step: int,
    ceiling: int,
) -> str:
    """Run all checks; returns the normalized bidder name."""
    check_price_granularity(price, step)
    check_above_current(price, lot.current_bid)
    check_price_ceiling(price, ceiling)
    check_units(units, lot.unit_quantity)
    return normalize_bidder_name(bidder_name)
