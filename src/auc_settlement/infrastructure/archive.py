"""ArchiveRepository — auction_results_archive writer/reader.

One row per lot; re-archiving overwrites it, so the snapshot always matches
the latest resolve() of the ledger.
"""

import json
from dataclasses import asdict
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_settlement.domain.models import ArchivedResult, ArchivedWinner

_UPSERT_SQL = text("""
    INSERT INTO auction_results_archive (lot_id, lot_name, starting_price, final_bid,
        unit_quantity, close_time, winning_bids, total_winning_amount, archived_at)
    VALUES (:lot_id, :lot_name, :starting_price, :final_bid,
        :unit_quantity, :close_time, CAST(:winning_bids AS JSONB),
        :total_winning_amount, :archived_at)
    ON CONFLICT (lot_id) DO UPDATE
    SET lot_name = EXCLUDED.lot_name,
        starting_price = EXCLUDED.starting_price,
        final_bid = EXCLUDED.final_bid,
        unit_quantity = EXCLUDED.unit_quantity,
        close_time = EXCLUDED.close_time,
        winning_bids = EXCLUDED.winning_bids,
        total_winning_amount = EXCLUDED.total_winning_amount,
        archived_at = EXCLUDED.archived_at
""")

_LIST_SQL = text("""
    SELECT lot_id, lot_name, starting_price, final_bid, unit_quantity, close_time,
           winning_bids, total_winning_amount, archived_at
    FROM auction_results_archive
    ORDER BY close_time DESC NULLS LAST, lot_id DESC
    LIMIT :limit OFFSET :offset
""")


def _row_to_result(row: Any) -> ArchivedResult:
    raw = row.winning_bids
    # asyncpg hands JSONB back as text unless a codec is registered
    winners = json.loads(raw) if isinstance(raw, str) else (raw or [])
    return ArchivedResult(
        lot_id=row.lot_id,
        lot_name=row.lot_name,
        starting_price=row.starting_price,
        final_bid=row.final_bid,
        unit_quantity=row.unit_quantity,
        close_time=row.close_time,
        total_winning_amount=row.total_winning_amount,
        archived_at=row.archived_at,
        winners=[ArchivedWinner(**w) for w in winners],
    )


class ArchiveRepository:
    async def upsert_result(self, db: AsyncSession, result: ArchivedResult) -> None:
        await db.execute(
            _UPSERT_SQL,
            {
                "lot_id": result.lot_id,
                "lot_name": result.lot_name,
                "starting_price": result.starting_price,
                "final_bid": result.final_bid,
                "unit_quantity": result.unit_quantity,
                "close_time": result.close_time,
                "winning_bids": json.dumps([asdict(w) for w in result.winners]),
                "total_winning_amount": result.total_winning_amount,
                "archived_at": result.archived_at,
            },
        )

    async def list_results(
        self, db: AsyncSession, limit: int, offset: int
    ) -> list[ArchivedResult]:
        rows = (await db.execute(_LIST_SQL, {"limit": limit, "offset": offset})).fetchall()
        return [_row_to_result(row) for row in rows]
