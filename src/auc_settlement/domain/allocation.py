"""Multi-unit allocation — greedy, highest price first.

A lot sells unit_quantity identical units. Bids are walked in leader
priority order (price DESC, created_at ASC) and each takes
min(remaining, units_requested). Bids left with zero units are outbid.
Every winner pays its own price (no uniform clearing price).

aggregate_total() reaches the same sum by a different route: it treats each
requested unit as a price "slot", counts slots per price level and adds the
top unit_quantity slots. Both must agree for any ledger.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from src.auc_bid.domain.leader import rank_bids
from src.auc_bid.domain.models import Bid


@dataclass(frozen=True)
class Award:
    bid: Bid
    units_awarded: int

    @property
    def amount(self) -> int:
        return self.bid.price * self.units_awarded


def allocate(bids: Iterable[Bid], unit_quantity: int) -> list[Award]:
    """Winning bids in priority order; an empty ledger yields no award."""
    awards: list[Award] = []
    remaining = unit_quantity
    for bid in rank_bids(bids):
        if remaining <= 0:
            break
        units = min(remaining, bid.units_requested)
        if units > 0:
            awards.append(Award(bid=bid, units_awarded=units))
            remaining -= units
    return awards


def awarded_total(awards: Sequence[Award]) -> int:
    return sum(a.amount for a in awards)


def awarded_units(awards: Sequence[Award]) -> int:
    return sum(a.units_awarded for a in awards)


def aggregate_total(bids: Iterable[Bid], unit_quantity: int) -> int:
    """Sum of the unit_quantity highest per-unit price slots."""
    slots_at: Counter[int] = Counter()
    for bid in bids:
        slots_at[bid.price] += bid.units_requested
    total = 0
    remaining = unit_quantity
    for price in sorted(slots_at, reverse=True):
        if remaining <= 0:
            break
        taken = min(remaining, slots_at[price])
        total += price * taken
        remaining -= taken
    return total
