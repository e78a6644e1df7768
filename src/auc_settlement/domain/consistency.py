"""Cache-vs-ledger consistency check for closed lots.

Open lots are exempt: their cache reflects the last bid placed and may be
momentarily stale after an admin delete races a placement.
"""

from collections.abc import Iterable
from datetime import datetime

from src.auc_bid.domain.leader import expected_leader
from src.auc_bid.domain.models import Bid, Leader
from src.auc_common.errors import ConsistencyFault
from src.auc_lot.domain.models import Lot, is_lot_open


def cached_leader(lot: Lot) -> Leader:
    return Leader(current_bid=lot.current_bid, leading_bidder_name=lot.leading_bidder_name)


def find_fault(lot: Lot, bids: Iterable[Bid], now: datetime) -> ConsistencyFault | None:
    """Return the fault for a closed lot whose cache diverges, else None."""
    if is_lot_open(lot, now):
        return None
    cached = cached_leader(lot)
    expected = expected_leader(bids, lot.starting_price)
    if cached == expected:
        return None
    return ConsistencyFault(
        lot.id,
        (cached.current_bid, cached.leading_bidder_name),
        (expected.current_bid, expected.leading_bidder_name),
    )
