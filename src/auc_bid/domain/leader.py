"""Leader selection — the one ranking rule shared by every write path.

Order: price descending, then created_at ascending (first mover wins a tie),
then bid id ascending for bids stamped with the same instant.
"""

from collections.abc import Iterable

from src.auc_bid.domain.models import Bid, Leader
from src.auc_common.id_generator import id_sort_key


def priority_key(bid: Bid) -> tuple:
    return (-bid.price, bid.created_at, id_sort_key(bid.id))


def rank_bids(bids: Iterable[Bid]) -> list[Bid]:
    """Ledger in allocation priority order."""
    return sorted(bids, key=priority_key)


def select_leader(bids: Iterable[Bid]) -> Bid | None:
    return min(bids, key=priority_key, default=None)


def expected_leader(bids: Iterable[Bid], starting_price: int) -> Leader:
    """What the lot's cached fields must be for this ledger."""
    top = select_leader(bids)
    if top is None:
        return Leader(current_bid=starting_price, leading_bidder_name=None)
    return Leader(current_bid=top.price, leading_bidder_name=top.bidder_name)
