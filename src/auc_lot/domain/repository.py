# src/auc_lot/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject an in-memory fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_lot.domain.models import Lot, LotBidStats


class LotRepositoryProtocol(Protocol):
    async def get_lot(self, db: AsyncSession, lot_id: str) -> Lot | None: ...

    async def get_lot_for_update(self, db: AsyncSession, lot_id: str) -> Lot | None: ...

    async def list_lots(self, db: AsyncSession) -> list[Lot]: ...

    async def insert_lot(self, db: AsyncSession, lot: Lot) -> None: ...

    async def delete_lot(self, db: AsyncSession, lot_id: str) -> bool: ...

    async def advance_current_bid(
        self,
        db: AsyncSession,
        lot_id: str,
        price: int,
        bidder_name: str,
    ) -> bool:
        """Set the cached leader iff price > stored current_bid. True if applied."""
        ...

    async def write_leader(
        self,
        db: AsyncSession,
        lot_id: str,
        current_bid: int,
        leading_bidder_name: str | None,
    ) -> None: ...

    async def get_bid_stats(self, db: AsyncSession) -> dict[str, LotBidStats]: ...

    async def get_bid_stats_for_lot(self, db: AsyncSession, lot_id: str) -> LotBidStats: ...
