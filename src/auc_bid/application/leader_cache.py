"""Rewrite a lot's cached leader fields from its ledger.

Used by bid removal and by sync. Placement skips it: a bid that passed the
"strictly higher" check is the new leader by construction.
Caller must hold the lot lock and an open transaction.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.domain.leader import expected_leader
from src.auc_bid.domain.models import Leader
from src.auc_bid.domain.repository import BidRepositoryProtocol
from src.auc_lot.domain.models import Lot
from src.auc_lot.domain.repository import LotRepositoryProtocol


@dataclass(frozen=True)
class LeaderRefresh:
    lot_id: str
    before: Leader
    after: Leader

    @property
    def changed(self) -> bool:
        return self.before != self.after


async def refresh_leader_cache(
    db: AsyncSession,
    lot: Lot,
    bid_repo: BidRepositoryProtocol,
    lot_repo: LotRepositoryProtocol,
) -> LeaderRefresh:
    bids = await bid_repo.list_bids_for_lot(db, lot.id)
    before = Leader(current_bid=lot.current_bid, leading_bidder_name=lot.leading_bidder_name)
    after = expected_leader(bids, lot.starting_price)
    if after != before:
        await lot_repo.write_leader(db, lot.id, after.current_bid, after.leading_bidder_name)
    return LeaderRefresh(lot_id=lot.id, before=before, after=after)
