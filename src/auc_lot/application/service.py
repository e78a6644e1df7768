"""LotApplicationService — lot administration and the blind lot listing.

Closed lots are served with their ledger-derived leader; a diverging cache
is healed before it is shown.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_common.database import unit_of_work
from src.auc_common.datetime_utils import utc_now
from src.auc_common.enums import NotifyAction
from src.auc_common.errors import LotNotFoundError
from src.auc_common.id_generator import generate_id
from src.auc_common.locks import LotLockRegistry, get_lot_locks
from src.auc_common.notifier import LotNotifierProtocol, RedisLotNotifier, notify_quietly
from src.auc_lot.application.schemas import CreateLotRequest, LotListResponse, LotOut
from src.auc_lot.domain.models import Lot, LotBidStats, is_lot_open
from src.auc_lot.domain.repository import LotRepositoryProtocol
from src.auc_lot.infrastructure.persistence import LotRepository
from src.auc_settlement.application.consistency import (
    ConsistencyService,
    get_consistency_service,
)

logger = logging.getLogger(__name__)


class LotApplicationService:
    def __init__(
        self,
        repo: LotRepositoryProtocol | None = None,
        notifier: LotNotifierProtocol | None = None,
        consistency: ConsistencyService | None = None,
        locks: LotLockRegistry | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo: LotRepositoryProtocol = repo or LotRepository()
        self._notifier: LotNotifierProtocol = notifier or RedisLotNotifier()
        self._consistency = consistency or get_consistency_service()
        self._locks = locks or get_lot_locks()
        self._clock = clock

    async def create_lot(self, db: AsyncSession, req: CreateLotRequest) -> LotOut:
        now = self._clock()
        lot = Lot(
            id=generate_id(),
            name=req.name,
            starting_price=req.starting_price,
            unit_quantity=req.unit_quantity,
            close_time=req.close_time,
            current_bid=req.starting_price,
            leading_bidder_name=None,
            created_at=now,
            updated_at=now,
        )
        async with unit_of_work(db):
            await self._repo.insert_lot(db, lot)
        logger.info("Lot created: %s (%s) x%d", lot.id, lot.name, lot.unit_quantity)
        await notify_quietly(self._notifier, lot.id, NotifyAction.ADDED)
        return LotOut.from_domain(lot, not is_lot_open(lot, now), None)

    async def delete_lot(self, db: AsyncSession, lot_id: str) -> None:
        async with self._locks.for_lot(lot_id):
            async with unit_of_work(db):
                if not await self._repo.delete_lot(db, lot_id):
                    raise LotNotFoundError(lot_id)
        self._locks.discard(lot_id)
        logger.info("Lot deleted: %s", lot_id)
        await notify_quietly(self._notifier, lot_id, NotifyAction.DELETED)

    async def get_lot(self, db: AsyncSession, lot_id: str) -> LotOut:
        lot = await self._repo.get_lot(db, lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        stats = await self._repo.get_bid_stats_for_lot(db, lot_id)
        return await self._present(db, lot, stats, self._clock())

    async def list_lots(self, db: AsyncSession) -> LotListResponse:
        """Open lots first, then closed; newest first within each group."""
        now = self._clock()
        lots = await self._repo.list_lots(db)
        stats = await self._repo.get_bid_stats(db)
        items = [await self._present(db, lot, stats.get(lot.id), now) for lot in lots]
        # list_lots is newest-first already and sort() is stable
        items.sort(key=lambda item: item.is_closed)
        return LotListResponse(items=items, server_time=now.isoformat())

    async def _present(
        self, db: AsyncSession, lot: Lot, stats: LotBidStats | None, now: datetime
    ) -> LotOut:
        closed = not is_lot_open(lot, now)
        if closed:
            lot = await self._consistency.heal_if_inconsistent(db, lot)
        return LotOut.from_domain(lot, closed, stats)


_service: LotApplicationService | None = None


def get_lot_service() -> LotApplicationService:
    global _service  # noqa: PLW0603
    if _service is None:
        _service = LotApplicationService()
    return _service
