"""Domain models for auc_settlement."""

from dataclasses import dataclass, field
from datetime import datetime

from src.auc_lot.domain.models import Lot
from src.auc_settlement.domain.allocation import Award


@dataclass
class Settlement:
    """resolve() output for one lot, re-derivable from the ledger at any time."""

    lot: Lot
    awards: list[Award]
    total_amount: int
    closed: bool

    @property
    def units_sold(self) -> int:
        return sum(a.units_awarded for a in self.awards)

    @property
    def final_bid(self) -> int:
        """Top awarded price, or the starting price when unsold."""
        return self.awards[0].bid.price if self.awards else self.lot.starting_price


@dataclass
class ArchivedWinner:
    bid_id: str
    price: int
    units_requested: int
    units_awarded: int
    bidder_name: str
    bidder_identity: str | None
    created_at: str


@dataclass
class ArchivedResult:
    """One row of auction_results_archive."""

    lot_id: str
    lot_name: str
    starting_price: int
    final_bid: int
    unit_quantity: int
    close_time: datetime | None
    total_winning_amount: int
    archived_at: datetime
    winners: list[ArchivedWinner] = field(default_factory=list)
