# src/auc_bid/infrastructure/persistence.py
"""BidRepository — raw SQL persistence for the bid ledger."""
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.domain.models import Bid

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_INSERT_BID_SQL = text("""
    INSERT INTO bids (id, lot_id, price, units_requested,
        bidder_name, bidder_identity, created_at)
    VALUES (:id, :lot_id, :price, :units_requested,
        :bidder_name, :bidder_identity, :created_at)
""")

_DELETE_BID_SQL = text("DELETE FROM bids WHERE id = :bid_id RETURNING id")

_SELECT_COLUMNS = """
    id, lot_id, price, units_requested, bidder_name, bidder_identity, created_at
"""

_GET_BID_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bids WHERE id = :bid_id
""")

_LIST_BY_LOT_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bids
    WHERE lot_id = :lot_id
    ORDER BY price DESC, created_at ASC, id ASC
""")

_LIST_ALL_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bids
    ORDER BY lot_id, price DESC, created_at ASC, id ASC
""")

_LIST_BY_BIDDER_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bids
    WHERE bidder_identity = :bidder_identity
    ORDER BY created_at DESC, id DESC
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_bid(row: Any) -> Bid:
    return Bid(
        id=row.id,
        lot_id=row.lot_id,
        price=row.price,
        units_requested=row.units_requested,
        bidder_name=row.bidder_name,
        bidder_identity=row.bidder_identity,
        created_at=row.created_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class BidRepository:
    """Concrete implementation of BidRepositoryProtocol using raw SQL."""

    async def insert_bid(self, db: AsyncSession, bid: Bid) -> None:
        await db.execute(
            _INSERT_BID_SQL,
            {
                "id": bid.id,
                "lot_id": bid.lot_id,
                "price": bid.price,
                "units_requested": bid.units_requested,
                "bidder_name": bid.bidder_name,
                "bidder_identity": bid.bidder_identity,
                "created_at": bid.created_at,
            },
        )

    async def delete_bid(self, db: AsyncSession, bid_id: str) -> bool:
        result = await db.execute(_DELETE_BID_SQL, {"bid_id": bid_id})
        return result.fetchone() is not None

    async def get_bid(self, db: AsyncSession, bid_id: str) -> Bid | None:
        row = (await db.execute(_GET_BID_SQL, {"bid_id": bid_id})).fetchone()
        return _row_to_bid(row) if row else None

    async def list_bids_for_lot(self, db: AsyncSession, lot_id: str) -> list[Bid]:
        rows = (await db.execute(_LIST_BY_LOT_SQL, {"lot_id": lot_id})).fetchall()
        return [_row_to_bid(row) for row in rows]

    async def list_all_bids(self, db: AsyncSession) -> list[Bid]:
        rows = (await db.execute(_LIST_ALL_SQL)).fetchall()
        return [_row_to_bid(row) for row in rows]

    async def list_bids_by_bidder(self, db: AsyncSession, bidder_identity: str) -> list[Bid]:
        rows = (
            await db.execute(_LIST_BY_BIDDER_SQL, {"bidder_identity": bidder_identity})
        ).fetchall()
        return [_row_to_bid(row) for row in rows]
