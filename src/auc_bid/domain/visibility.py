"""Blind-auction visibility policy.

| Viewer            | Lot    | Bids shown                    | Aggregate |
|-------------------|--------|-------------------------------|-----------|
| anyone, incl admin| OPEN   | own bids only (none if anon)  | masked    |
| anyone            | CLOSED | every bid, in priority order  | revealed  |

Admins get no cross-bidder view before close; their only extra right is
deleting bids. Counts never carry prices and are always shown.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from src.auc_bid.domain.leader import rank_bids
from src.auc_bid.domain.models import Bid, Viewer
from src.auc_common.amounts import format_amount, mask_amount


def is_own_bid(bid: Bid, viewer: Viewer) -> bool:
    return viewer.identity is not None and bid.bidder_identity == viewer.identity


def visible_bids(bids: Sequence[Bid], viewer: Viewer, closed: bool) -> list[Bid]:
    if closed:
        return rank_bids(bids)
    return [b for b in bids if is_own_bid(b, viewer)]


def can_delete_bid(viewer: Viewer) -> bool:
    return viewer.is_admin


@dataclass(frozen=True)
class BidCounts:
    total_bids: int
    my_bids: int


def bid_counts(bids: Sequence[Bid], viewer: Viewer) -> BidCounts:
    return BidCounts(
        total_bids=len(bids),
        my_bids=sum(1 for b in bids if is_own_bid(b, viewer)),
    )


@dataclass(frozen=True)
class AmountView:
    """Aggregate as shown to a viewer: amount is None while masked."""

    amount: int | None
    display: str
    masked: bool


def amount_view(amount: int, revealed: bool) -> AmountView:
    if revealed:
        return AmountView(amount=amount, display=format_amount(amount), masked=False)
    return AmountView(amount=None, display=mask_amount(amount), masked=True)
