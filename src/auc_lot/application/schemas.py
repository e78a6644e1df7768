"""Pydantic schemas for auc_lot.

Blind listing: while a lot is open, current_bid shows the starting price and
the leader is hidden; only the bid/bidder counts move.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.auc_common.datetime_utils import ensure_utc
from src.auc_lot.domain.models import Lot, LotBidStats


class CreateLotRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    starting_price: int = Field(..., ge=0)
    unit_quantity: int = Field(1, ge=1)
    close_time: datetime | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Lot name must not be blank")
        return v

    @field_validator("close_time")
    @classmethod
    def close_time_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v) if v is not None else None


class LotOut(BaseModel):
    id: str
    name: str
    starting_price: int
    unit_quantity: int
    close_time: str | None
    is_closed: bool
    current_bid: int
    leading_bidder_name: str | None
    bidder_count: int
    total_bids_count: int
    created_at: str

    @classmethod
    def from_domain(cls, lot: Lot, closed: bool, stats: LotBidStats | None) -> "LotOut":
        return cls(
            id=lot.id,
            name=lot.name,
            starting_price=lot.starting_price,
            unit_quantity=lot.unit_quantity,
            close_time=lot.close_time.isoformat() if lot.close_time else None,
            is_closed=closed,
            current_bid=lot.current_bid if closed else lot.starting_price,
            leading_bidder_name=lot.leading_bidder_name if closed else None,
            bidder_count=stats.bidder_count if stats else 0,
            total_bids_count=stats.total_bids if stats else 0,
            created_at=lot.created_at.isoformat(),
        )


class LotListResponse(BaseModel):
    items: list[LotOut]
    server_time: str
