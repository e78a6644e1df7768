"""Domain models for auc_lot — dataclasses plus the single open/closed predicate."""

from dataclasses import dataclass
from datetime import datetime

from src.auc_common.enums import LotPhase


@dataclass
class Lot:
    id: str
    name: str
    starting_price: int
    unit_quantity: int
    close_time: datetime | None
    # Cache of the ledger leader; starting_price / None while the ledger is empty
    current_bid: int
    leading_bidder_name: str | None
    created_at: datetime
    updated_at: datetime


@dataclass
class LotBidStats:
    """Counts that never leak prices; shown before close too."""

    lot_id: str
    total_bids: int
    bidder_count: int


def lot_phase(lot: Lot, now: datetime) -> LotPhase:
    """OPEN while now < close_time; a lot without close_time never closes."""
    if lot.close_time is None or now < lot.close_time:
        return LotPhase.OPEN
    return LotPhase.CLOSED


def is_lot_open(lot: Lot, now: datetime) -> bool:
    return lot_phase(lot, now) is LotPhase.OPEN
