"""SettlementService — allocation, totals and archival snapshots.

Everything here is a pure function of the ledger: resolve() can be re-run
any number of times and archive rows are overwritten, never appended.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.application.schemas import AmountOut
from src.auc_bid.domain.models import Bid, Viewer
from src.auc_bid.domain.repository import BidRepositoryProtocol
from src.auc_bid.domain.visibility import amount_view
from src.auc_bid.infrastructure.persistence import BidRepository
from src.auc_common.database import unit_of_work
from src.auc_common.datetime_utils import utc_now
from src.auc_common.errors import LotNotFoundError, LotStillOpenError
from src.auc_lot.domain.models import Lot, is_lot_open
from src.auc_lot.domain.repository import LotRepositoryProtocol
from src.auc_lot.infrastructure.persistence import LotRepository
from src.auc_settlement.application.consistency import (
    ConsistencyService,
    get_consistency_service,
)
from src.auc_settlement.application.schemas import (
    ArchiveListResponse,
    ArchivedResultOut,
    ArchiveRunResponse,
    MyBidOut,
    SummaryResponse,
    WinnersResponse,
)
from src.auc_settlement.domain.allocation import aggregate_total, allocate, awarded_total
from src.auc_settlement.domain.models import ArchivedResult, ArchivedWinner, Settlement
from src.auc_settlement.domain.repository import ArchiveRepositoryProtocol
from src.auc_settlement.infrastructure.archive import ArchiveRepository

logger = logging.getLogger(__name__)


class SettlementService:
    def __init__(
        self,
        bid_repo: BidRepositoryProtocol | None = None,
        lot_repo: LotRepositoryProtocol | None = None,
        archive_repo: ArchiveRepositoryProtocol | None = None,
        consistency: ConsistencyService | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._bid_repo: BidRepositoryProtocol = bid_repo or BidRepository()
        self._lot_repo: LotRepositoryProtocol = lot_repo or LotRepository()
        self._archive_repo: ArchiveRepositoryProtocol = archive_repo or ArchiveRepository()
        self._consistency = consistency or get_consistency_service()
        self._clock = clock

    def _settle(self, lot: Lot, bids: list[Bid], now: datetime) -> Settlement:
        awards = allocate(bids, lot.unit_quantity)
        return Settlement(
            lot=lot,
            awards=awards,
            total_amount=awarded_total(awards),
            closed=not is_lot_open(lot, now),
        )

    async def resolve(self, db: AsyncSession, lot_id: str) -> Settlement:
        lot = await self._lot_repo.get_lot(db, lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        bids = await self._bid_repo.list_bids_for_lot(db, lot_id)
        return self._settle(lot, bids, self._clock())

    async def get_winners(self, db: AsyncSession, lot_id: str) -> WinnersResponse:
        """Public winners list; refused until the lot closes."""
        lot = await self._lot_repo.get_lot(db, lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        if is_lot_open(lot, self._clock()):
            raise LotStillOpenError(lot_id)
        await self._consistency.heal_if_inconsistent(db, lot)
        return WinnersResponse.from_settlement(await self.resolve(db, lot_id))

    async def summary(self, db: AsyncSession, viewer: Viewer) -> SummaryResponse:
        now = self._clock()
        lots = await self._lot_repo.list_lots(db)
        by_lot: dict[str, list[Bid]] = defaultdict(list)
        for bid in await self._bid_repo.list_all_bids(db):
            by_lot[bid.lot_id].append(bid)

        grand_total = 0
        completed_total = 0
        completed_count = 0
        open_with_bids = False
        for lot in lots:
            lot_bids = by_lot.get(lot.id, [])
            lot_total = aggregate_total(lot_bids, lot.unit_quantity)
            grand_total += lot_total
            if is_lot_open(lot, now):
                open_with_bids = open_with_bids or bool(lot_bids)
            else:
                completed_count += 1
                completed_total += lot_total

        my_bids: list[MyBidOut] = []
        my_total = 0
        if viewer.identity is not None:
            names = {lot.id: lot.name for lot in lots}
            for bid in await self._bid_repo.list_bids_by_bidder(db, viewer.identity):
                if bid.lot_id not in names:
                    continue
                my_bids.append(MyBidOut.from_domain(bid, names[bid.lot_id]))
                my_total += bid.price * bid.units_requested

        return SummaryResponse(
            total_bid_amount=AmountOut.from_view(
                amount_view(grand_total, revealed=not open_with_bids)
            ),
            completed_total_bid_amount=completed_total,
            completed_count=completed_count,
            my_total_bid_amount=my_total,
            my_bids=my_bids,
        )

    async def archive_closed_lots(self, db: AsyncSession) -> ArchiveRunResponse:
        """Snapshot resolve() of every closed lot into auction_results_archive."""
        now = self._clock()
        archived: list[str] = []
        for lot in await self._lot_repo.list_lots(db):
            if is_lot_open(lot, now):
                continue
            await self._consistency.heal_if_inconsistent(db, lot)
            settlement = await self.resolve(db, lot.id)
            result = ArchivedResult(
                lot_id=lot.id,
                lot_name=lot.name,
                starting_price=lot.starting_price,
                final_bid=settlement.final_bid,
                unit_quantity=lot.unit_quantity,
                close_time=lot.close_time,
                total_winning_amount=settlement.total_amount,
                archived_at=now,
                winners=[
                    ArchivedWinner(
                        bid_id=a.bid.id,
                        price=a.bid.price,
                        units_requested=a.bid.units_requested,
                        units_awarded=a.units_awarded,
                        bidder_name=a.bid.bidder_name,
                        bidder_identity=a.bid.bidder_identity,
                        created_at=a.bid.created_at.isoformat(),
                    )
                    for a in settlement.awards
                ],
            )
            async with unit_of_work(db):
                await self._archive_repo.upsert_result(db, result)
            archived.append(lot.id)
            logger.info(
                "Archived lot %s: %d winner(s), total=%d",
                lot.id, len(result.winners), result.total_winning_amount,
            )
        return ArchiveRunResponse(archived_count=len(archived), archived_lot_ids=archived)

    async def list_archive(
        self, db: AsyncSession, limit: int, offset: int
    ) -> ArchiveListResponse:
        results = await self._archive_repo.list_results(db, limit, offset)
        items = [ArchivedResultOut.from_domain(r) for r in results]
        return ArchiveListResponse(items=items, count=len(items))


_service: SettlementService | None = None


def get_settlement_service() -> SettlementService:
    global _service  # noqa: PLW0603
    if _service is None:
        _service = SettlementService()
    return _service
