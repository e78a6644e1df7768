"""ConsistencyService — detect and repair drift between lots.current_bid and the ledger.

Faults on closed lots are healed on read (heal_if_inconsistent) and by the
admin audit. They are logged and counted, never raised to clients.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.application.leader_cache import LeaderRefresh, refresh_leader_cache
from src.auc_bid.domain.repository import BidRepositoryProtocol
from src.auc_bid.infrastructure.persistence import BidRepository
from src.auc_common.database import unit_of_work
from src.auc_common.datetime_utils import utc_now
from src.auc_common.errors import LotNotFoundError
from src.auc_common.locks import LotLockRegistry, get_lot_locks
from src.auc_lot.domain.models import Lot, is_lot_open
from src.auc_lot.domain.repository import LotRepositoryProtocol
from src.auc_lot.infrastructure.persistence import LotRepository
from src.auc_settlement.domain.consistency import find_fault

logger = logging.getLogger(__name__)


class ConsistencyService:
    def __init__(
        self,
        bid_repo: BidRepositoryProtocol | None = None,
        lot_repo: LotRepositoryProtocol | None = None,
        locks: LotLockRegistry | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._bid_repo: BidRepositoryProtocol = bid_repo or BidRepository()
        self._lot_repo: LotRepositoryProtocol = lot_repo or LotRepository()
        self._locks = locks or get_lot_locks()
        self._clock = clock
        self.faults_detected = 0

    async def is_inconsistent(self, db: AsyncSession, lot_id: str) -> bool:
        lot = await self._lot_repo.get_lot(db, lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        bids = await self._bid_repo.list_bids_for_lot(db, lot_id)
        return find_fault(lot, bids, self._clock()) is not None

    async def sync(self, db: AsyncSession, lot_id: str) -> LeaderRefresh:
        """Overwrite the cached leader with the ledger-derived one. Idempotent."""
        async with self._locks.for_lot(lot_id):
            async with unit_of_work(db):
                lot = await self._lot_repo.get_lot_for_update(db, lot_id)
                if lot is None:
                    raise LotNotFoundError(lot_id)
                refresh = await refresh_leader_cache(db, lot, self._bid_repo, self._lot_repo)
        if refresh.changed:
            logger.info(
                "Lot %s leader synced: %s -> %s", lot_id, refresh.before, refresh.after
            )
        return refresh

    async def heal_if_inconsistent(self, db: AsyncSession, lot: Lot) -> Lot:
        """Auto-heal on read. Returns the lot with corrected cached fields."""
        bids = await self._bid_repo.list_bids_for_lot(db, lot.id)
        fault = find_fault(lot, bids, self._clock())
        if fault is None:
            return lot
        self.faults_detected += 1
        logger.warning("Consistency fault (auto-healing): %s", fault.message)
        refresh = await self.sync(db, lot.id)
        lot.current_bid = refresh.after.current_bid
        lot.leading_bidder_name = refresh.after.leading_bidder_name
        return lot

    async def verify_closed_lots(self, db: AsyncSession) -> dict[str, object]:
        """Audit every closed lot; heal and report the faulty ones."""
        now = self._clock()
        healed: list[str] = []
        checked = 0
        for lot in await self._lot_repo.list_lots(db):
            if is_lot_open(lot, now):
                continue
            checked += 1
            bids = await self._bid_repo.list_bids_for_lot(db, lot.id)
            fault = find_fault(lot, bids, now)
            if fault is None:
                continue
            self.faults_detected += 1
            logger.warning("Consistency fault (audit): %s", fault.message)
            await self.sync(db, lot.id)
            healed.append(lot.id)
        return {"ok": not healed, "checked": checked, "healed_lot_ids": healed}


_service: ConsistencyService | None = None


def get_consistency_service() -> ConsistencyService:
    global _service  # noqa: PLW0603
    if _service is None:
        _service = ConsistencyService()
    return _service
