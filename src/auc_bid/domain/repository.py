# src/auc_bid/domain/repository.py
"""Bid ledger repository Protocol.

Append and delete only: bids are never updated in place.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.domain.models import Bid


class BidRepositoryProtocol(Protocol):
    async def insert_bid(self, db: AsyncSession, bid: Bid) -> None: ...

    async def delete_bid(self, db: AsyncSession, bid_id: str) -> bool: ...

    async def get_bid(self, db: AsyncSession, bid_id: str) -> Bid | None: ...

    async def list_bids_for_lot(self, db: AsyncSession, lot_id: str) -> list[Bid]:
        """All bids of one lot, price DESC, created_at ASC."""
        ...

    async def list_all_bids(self, db: AsyncSession) -> list[Bid]: ...

    async def list_bids_by_bidder(self, db: AsyncSession, bidder_identity: str) -> list[Bid]:
        """One bidder's bids across lots, newest first."""
        ...
