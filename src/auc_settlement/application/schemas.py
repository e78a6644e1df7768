"""Pydantic schemas for auc_settlement API responses."""

from pydantic import BaseModel

from src.auc_bid.application.leader_cache import LeaderRefresh
from src.auc_bid.application.schemas import AmountOut
from src.auc_bid.domain.models import Bid
from src.auc_common.amounts import format_amount
from src.auc_settlement.domain.allocation import Award
from src.auc_settlement.domain.models import ArchivedResult, ArchivedWinner, Settlement

# ---------------------------------------------------------------------------
# Winners (resolve)
# ---------------------------------------------------------------------------


class AwardOut(BaseModel):
    bid_id: str
    bidder_name: str
    price: int
    units_requested: int
    units_awarded: int
    amount: int
    created_at: str

    @classmethod
    def from_domain(cls, award: Award) -> "AwardOut":
        return cls(
            bid_id=award.bid.id,
            bidder_name=award.bid.bidder_name,
            price=award.bid.price,
            units_requested=award.bid.units_requested,
            units_awarded=award.units_awarded,
            amount=award.amount,
            created_at=award.bid.created_at.isoformat(),
        )


class WinnersResponse(BaseModel):
    lot_id: str
    lot_name: str
    unit_quantity: int
    units_sold: int
    final_bid: int
    total_amount: int
    total_amount_display: str
    awards: list[AwardOut]

    @classmethod
    def from_settlement(cls, s: Settlement) -> "WinnersResponse":
        return cls(
            lot_id=s.lot.id,
            lot_name=s.lot.name,
            unit_quantity=s.lot.unit_quantity,
            units_sold=s.units_sold,
            final_bid=s.final_bid,
            total_amount=s.total_amount,
            total_amount_display=format_amount(s.total_amount),
            awards=[AwardOut.from_domain(a) for a in s.awards],
        )


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class MyBidOut(BaseModel):
    lot_id: str
    lot_name: str
    price: int
    units: int
    bid_time: str

    @classmethod
    def from_domain(cls, bid: Bid, lot_name: str) -> "MyBidOut":
        return cls(
            lot_id=bid.lot_id,
            lot_name=lot_name,
            price=bid.price,
            units=bid.units_requested,
            bid_time=bid.created_at.isoformat(),
        )


class SummaryResponse(BaseModel):
    total_bid_amount: AmountOut
    completed_total_bid_amount: int
    completed_count: int
    my_total_bid_amount: int
    my_bids: list[MyBidOut]


# ---------------------------------------------------------------------------
# Admin: sync / archive
# ---------------------------------------------------------------------------


class SyncResponse(BaseModel):
    lot_id: str
    changed: bool
    current_bid: int
    leading_bidder_name: str | None

    @classmethod
    def from_refresh(cls, refresh: LeaderRefresh) -> "SyncResponse":
        return cls(
            lot_id=refresh.lot_id,
            changed=refresh.changed,
            current_bid=refresh.after.current_bid,
            leading_bidder_name=refresh.after.leading_bidder_name,
        )


class ArchivedWinnerOut(BaseModel):
    bid_id: str
    price: int
    units_requested: int
    units_awarded: int
    bidder_name: str
    created_at: str

    @classmethod
    def from_domain(cls, w: ArchivedWinner) -> "ArchivedWinnerOut":
        return cls(
            bid_id=w.bid_id,
            price=w.price,
            units_requested=w.units_requested,
            units_awarded=w.units_awarded,
            bidder_name=w.bidder_name,
            created_at=w.created_at,
        )


class ArchivedResultOut(BaseModel):
    lot_id: str
    lot_name: str
    starting_price: int
    final_bid: int
    unit_quantity: int
    close_time: str | None
    total_winning_amount: int
    archived_at: str
    winners: list[ArchivedWinnerOut]

    @classmethod
    def from_domain(cls, r: ArchivedResult) -> "ArchivedResultOut":
        return cls(
            lot_id=r.lot_id,
            lot_name=r.lot_name,
            starting_price=r.starting_price,
            final_bid=r.final_bid,
            unit_quantity=r.unit_quantity,
            close_time=r.close_time.isoformat() if r.close_time else None,
            total_winning_amount=r.total_winning_amount,
            archived_at=r.archived_at.isoformat(),
            winners=[ArchivedWinnerOut.from_domain(w) for w in r.winners],
        )


class ArchiveRunResponse(BaseModel):
    archived_count: int
    archived_lot_ids: list[str]


class ArchiveListResponse(BaseModel):
    items: list[ArchivedResultOut]
    count: int
