"""Pydantic schemas for auc_bid requests and responses."""

from pydantic import BaseModel, Field

from src.auc_bid.domain.models import Bid, Viewer
from src.auc_bid.domain.visibility import AmountView, BidCounts, is_own_bid
from src.auc_lot.domain.models import Lot


class PlaceBidRequest(BaseModel):
    price: int = Field(..., description="Per-unit price, a multiple of the price step")
    units: int = Field(1, description="Units requested, 1..lot.unit_quantity")
    bidder_name: str | None = Field(
        None, max_length=64, description="Display name; defaults to the token's name claim"
    )


class BidOut(BaseModel):
    id: str
    lot_id: str
    price: int
    units: int
    amount: int
    bidder_name: str
    created_at: str
    is_mine: bool

    @classmethod
    def from_domain(cls, bid: Bid, viewer: Viewer) -> "BidOut":
        return cls(
            id=bid.id,
            lot_id=bid.lot_id,
            price=bid.price,
            units=bid.units_requested,
            amount=bid.price * bid.units_requested,
            bidder_name=bid.bidder_name,
            created_at=bid.created_at.isoformat(),
            is_mine=is_own_bid(bid, viewer),
        )


class AmountOut(BaseModel):
    amount: int | None
    display: str
    masked: bool

    @classmethod
    def from_view(cls, view: AmountView) -> "AmountOut":
        return cls(amount=view.amount, display=view.display, masked=view.masked)


class LotHeaderOut(BaseModel):
    id: str
    name: str
    starting_price: int
    unit_quantity: int
    close_time: str | None
    # Before close: starting_price and null, whatever has been bid
    current_bid: int
    leading_bidder_name: str | None

    @classmethod
    def from_domain(cls, lot: Lot, closed: bool) -> "LotHeaderOut":
        return cls(
            id=lot.id,
            name=lot.name,
            starting_price=lot.starting_price,
            unit_quantity=lot.unit_quantity,
            close_time=lot.close_time.isoformat() if lot.close_time else None,
            current_bid=lot.current_bid if closed else lot.starting_price,
            leading_bidder_name=lot.leading_bidder_name if closed else None,
        )


class BidHistoryResponse(BaseModel):
    lot: LotHeaderOut
    is_closed: bool
    bids: list[BidOut]
    total_bids_count: int
    my_bids_count: int
    total_bid_amount: AmountOut

    @classmethod
    def build(
        cls,
        lot: Lot,
        closed: bool,
        bids: list[Bid],
        counts: BidCounts,
        total: AmountView,
        viewer: Viewer,
    ) -> "BidHistoryResponse":
        return cls(
            lot=LotHeaderOut.from_domain(lot, closed),
            is_closed=closed,
            bids=[BidOut.from_domain(b, viewer) for b in bids],
            total_bids_count=counts.total_bids,
            my_bids_count=counts.my_bids,
            total_bid_amount=AmountOut.from_view(total),
        )


class RemoveBidResponse(BaseModel):
    """Deliberately carries no price: admins stay blind until close too."""

    bid_id: str
    lot_id: str
