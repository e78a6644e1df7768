"""Domain models for auc_bid — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Bid:
    """Ledger entry. Never updated in place; only an admin may delete it."""

    id: str
    lot_id: str
    price: int
    units_requested: int
    bidder_name: str
    bidder_identity: str | None
    created_at: datetime


@dataclass(frozen=True)
class Viewer:
    """Resolved caller. identity is None for anonymous requests."""

    identity: str | None = None
    is_admin: bool = False
    display_name: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.identity is None


ANONYMOUS = Viewer()


@dataclass(frozen=True)
class Leader:
    """Cached-field projection of the ledger: what lots.current_bid should hold."""

    current_bid: int
    leading_bidder_name: str | None
