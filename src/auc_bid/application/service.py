# src/auc_bid/application/service.py
"""BidLedgerService — place / remove bids and serve the visibility-filtered history.

Writes on one lot are serialised by the per-lot lock; each write runs in its
own unit of work and publishes its change notification only after commit.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.auc_bid.application.leader_cache import LeaderRefresh, refresh_leader_cache
from src.auc_bid.application.schemas import BidHistoryResponse
from src.auc_bid.domain.models import Bid, Viewer
from src.auc_bid.domain.repository import BidRepositoryProtocol
from src.auc_bid.domain.rules import validate_bid
from src.auc_bid.domain.visibility import (
    amount_view,
    bid_counts,
    can_delete_bid,
    visible_bids,
)
from src.auc_bid.infrastructure.persistence import BidRepository
from src.auc_common.database import unit_of_work
from src.auc_common.datetime_utils import utc_now
from src.auc_common.enums import NotifyAction
from src.auc_common.errors import (
    AdminRequiredError,
    BidNotFoundError,
    BidTooLowError,
    LotClosedError,
    LotNotFoundError,
)
from src.auc_common.id_generator import generate_id
from src.auc_common.locks import LotLockRegistry, get_lot_locks
from src.auc_common.notifier import LotNotifierProtocol, RedisLotNotifier, notify_quietly
from src.auc_lot.domain.models import is_lot_open
from src.auc_lot.domain.repository import LotRepositoryProtocol
from src.auc_lot.infrastructure.persistence import LotRepository
from src.auc_settlement.application.consistency import (
    ConsistencyService,
    get_consistency_service,
)
from src.auc_settlement.domain.allocation import aggregate_total

logger = logging.getLogger(__name__)


class BidLedgerService:
    def __init__(
        self,
        bid_repo: BidRepositoryProtocol | None = None,
        lot_repo: LotRepositoryProtocol | None = None,
        notifier: LotNotifierProtocol | None = None,
        consistency: ConsistencyService | None = None,
        locks: LotLockRegistry | None = None,
        clock: Callable[[], datetime] = utc_now,
        price_step: int | None = None,
        max_price: int | None = None,
    ) -> None:
        self._bid_repo: BidRepositoryProtocol = bid_repo or BidRepository()
        self._lot_repo: LotRepositoryProtocol = lot_repo or LotRepository()
        self._notifier: LotNotifierProtocol = notifier or RedisLotNotifier()
        self._consistency = consistency or get_consistency_service()
        self._locks = locks or get_lot_locks()
        self._clock = clock
        self._price_step = price_step or settings.BID_PRICE_STEP
        self._max_price = max_price or settings.BID_MAX_PRICE

    async def place_bid(
        self,
        db: AsyncSession,
        lot_id: str,
        price: int,
        units_requested: int,
        bidder_name: str | None,
        bidder_identity: str | None,
    ) -> Bid:
        async with self._locks.for_lot(lot_id):
            async with unit_of_work(db):
                lot = await self._lot_repo.get_lot(db, lot_id)
                if lot is None:
                    raise LotNotFoundError(lot_id)
                now = self._clock()
                if not is_lot_open(lot, now):
                    raise LotClosedError(lot_id)
                name = validate_bid(
                    lot,
                    price,
                    units_requested,
                    bidder_name,
                    step=self._price_step,
                    ceiling=self._max_price,
                )
                # Guard against writers outside this process
                if not await self._lot_repo.advance_current_bid(db, lot_id, price, name):
                    raise BidTooLowError(price)
                bid = Bid(
                    id=generate_id(),
                    lot_id=lot_id,
                    price=price,
                    units_requested=units_requested,
                    bidder_name=name,
                    bidder_identity=bidder_identity,
                    created_at=now,
                )
                await self._bid_repo.insert_bid(db, bid)

        logger.debug("Bid placed: lot=%s bid=%s price=%d units=%d",
                     lot_id, bid.id, price, units_requested)
        await notify_quietly(self._notifier, lot_id, NotifyAction.BID)
        return bid

    async def remove_bid(
        self, db: AsyncSession, bid_id: str, viewer: Viewer
    ) -> LeaderRefresh:
        """Admin delete, followed by a ledger rescan of the owning lot."""
        if not can_delete_bid(viewer):
            raise AdminRequiredError()

        async with unit_of_work(db):
            bid = await self._bid_repo.get_bid(db, bid_id)
        if bid is None:
            raise BidNotFoundError(bid_id)

        async with self._locks.for_lot(bid.lot_id):
            async with unit_of_work(db):
                lot = await self._lot_repo.get_lot_for_update(db, bid.lot_id)
                if lot is None or not await self._bid_repo.delete_bid(db, bid_id):
                    raise BidNotFoundError(bid_id)
                refresh = await refresh_leader_cache(db, lot, self._bid_repo, self._lot_repo)

        logger.info(
            "Bid removed by %s: lot=%s bid=%s price=%d; leader now %s",
            viewer.identity, bid.lot_id, bid_id, bid.price, refresh.after,
        )
        await notify_quietly(self._notifier, bid.lot_id, NotifyAction.BID)
        return refresh

    async def get_bid_history(
        self, db: AsyncSession, lot_id: str, viewer: Viewer
    ) -> BidHistoryResponse:
        lot = await self._lot_repo.get_lot(db, lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        closed = not is_lot_open(lot, self._clock())
        if closed:
            lot = await self._consistency.heal_if_inconsistent(db, lot)

        bids = await self._bid_repo.list_bids_for_lot(db, lot_id)
        counts = bid_counts(bids, viewer)
        total = amount_view(aggregate_total(bids, lot.unit_quantity), revealed=closed)
        return BidHistoryResponse.build(
            lot=lot,
            closed=closed,
            bids=visible_bids(bids, viewer, closed),
            counts=counts,
            total=total,
            viewer=viewer,
        )


_service: BidLedgerService | None = None


def get_bid_ledger_service() -> BidLedgerService:
    global _service  # noqa: PLW0603
    if _service is None:
        _service = BidLedgerService()
    return _service
