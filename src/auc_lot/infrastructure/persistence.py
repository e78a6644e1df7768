"""LotRepository — concrete implementation of LotRepositoryProtocol.

All queries use raw text() SQL (no ORM).
The conditional UPDATE in advance_current_bid is the storage-level guard for
the "strictly higher than current" rule across processes.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_lot.domain.models import Lot, LotBidStats

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_LOT_COLUMNS = """
    id, name, starting_price, unit_quantity, close_time,
    current_bid, leading_bidder_name, created_at, updated_at
"""

_GET_LOT_SQL = text(f"""
    SELECT {_LOT_COLUMNS}
    FROM lots
    WHERE id = :lot_id
""")

_GET_LOT_FOR_UPDATE_SQL = text(f"""
    SELECT {_LOT_COLUMNS}
    FROM lots
    WHERE id = :lot_id
    FOR UPDATE
""")

_LIST_LOTS_SQL = text(f"""
    SELECT {_LOT_COLUMNS}
    FROM lots
    ORDER BY created_at DESC, id DESC
""")

_INSERT_LOT_SQL = text("""
    INSERT INTO lots (id, name, starting_price, unit_quantity, close_time,
        current_bid, leading_bidder_name, created_at, updated_at)
    VALUES (:id, :name, :starting_price, :unit_quantity, :close_time,
        :current_bid, :leading_bidder_name, :created_at, :updated_at)
""")

_DELETE_LOT_SQL = text("DELETE FROM lots WHERE id = :lot_id RETURNING id")

_ADVANCE_CURRENT_BID_SQL = text("""
    UPDATE lots
    SET current_bid = :price,
        leading_bidder_name = :bidder_name,
        updated_at = NOW()
    WHERE id = :lot_id AND current_bid < :price
    RETURNING id
""")

_WRITE_LEADER_SQL = text("""
    UPDATE lots
    SET current_bid = :current_bid,
        leading_bidder_name = :leading_bidder_name,
        updated_at = NOW()
    WHERE id = :lot_id
""")

_BID_STATS_SQL = text("""
    SELECT lot_id,
           COUNT(*) AS total_bids,
           COUNT(DISTINCT COALESCE(bidder_identity, bidder_name)) AS bidder_count
    FROM bids
    GROUP BY lot_id
""")

_LOT_BID_STATS_SQL = text("""
    SELECT COUNT(*) AS total_bids,
           COUNT(DISTINCT COALESCE(bidder_identity, bidder_name)) AS bidder_count
    FROM bids
    WHERE lot_id = :lot_id
""")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_lot(row: Any) -> Lot:
    return Lot(
        id=row.id,
        name=row.name,
        starting_price=row.starting_price,
        unit_quantity=row.unit_quantity,
        close_time=row.close_time,
        current_bid=row.current_bid,
        leading_bidder_name=row.leading_bidder_name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class LotRepository:
    async def get_lot(self, db: AsyncSession, lot_id: str) -> Lot | None:
        row = (await db.execute(_GET_LOT_SQL, {"lot_id": lot_id})).fetchone()
        return _row_to_lot(row) if row else None

    async def get_lot_for_update(self, db: AsyncSession, lot_id: str) -> Lot | None:
        row = (await db.execute(_GET_LOT_FOR_UPDATE_SQL, {"lot_id": lot_id})).fetchone()
        return _row_to_lot(row) if row else None

    async def list_lots(self, db: AsyncSession) -> list[Lot]:
        rows = (await db.execute(_LIST_LOTS_SQL)).fetchall()
        return [_row_to_lot(row) for row in rows]

    async def insert_lot(self, db: AsyncSession, lot: Lot) -> None:
        await db.execute(
            _INSERT_LOT_SQL,
            {
                "id": lot.id,
                "name": lot.name,
                "starting_price": lot.starting_price,
                "unit_quantity": lot.unit_quantity,
                "close_time": lot.close_time,
                "current_bid": lot.current_bid,
                "leading_bidder_name": lot.leading_bidder_name,
                "created_at": lot.created_at,
                "updated_at": lot.updated_at,
            },
        )

    async def delete_lot(self, db: AsyncSession, lot_id: str) -> bool:
        # bids go with it (FK ON DELETE CASCADE)
        result = await db.execute(_DELETE_LOT_SQL, {"lot_id": lot_id})
        return result.fetchone() is not None

    async def advance_current_bid(
        self, db: AsyncSession, lot_id: str, price: int, bidder_name: str
    ) -> bool:
        result = await db.execute(
            _ADVANCE_CURRENT_BID_SQL,
            {"lot_id": lot_id, "price": price, "bidder_name": bidder_name},
        )
        return result.fetchone() is not None

    async def write_leader(
        self,
        db: AsyncSession,
        lot_id: str,
        current_bid: int,
        leading_bidder_name: str | None,
    ) -> None:
        await db.execute(
            _WRITE_LEADER_SQL,
            {
                "lot_id": lot_id,
                "current_bid": current_bid,
                "leading_bidder_name": leading_bidder_name,
            },
        )

    async def get_bid_stats(self, db: AsyncSession) -> dict[str, LotBidStats]:
        rows = (await db.execute(_BID_STATS_SQL)).fetchall()
        return {
            row.lot_id: LotBidStats(
                lot_id=row.lot_id,
                total_bids=int(row.total_bids),
                bidder_count=int(row.bidder_count),
            )
            for row in rows
        }

    async def get_bid_stats_for_lot(self, db: AsyncSession, lot_id: str) -> LotBidStats:
        row = (await db.execute(_LOT_BID_STATS_SQL, {"lot_id": lot_id})).fetchone()
        return LotBidStats(
            lot_id=lot_id,
            total_bids=int(row.total_bids),
            bidder_count=int(row.bidder_count),
        )
