"""auc_bid REST endpoints.

POST   /lots/{lot_id}/bids  — place a bid (authenticated)
GET    /lots/{lot_id}/bids  — bid history as the caller may see it
DELETE /bids/{bid_id}       — remove a bid and recompute the leader (admin)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.application.schemas import BidOut, PlaceBidRequest, RemoveBidResponse
from src.auc_bid.application.service import BidLedgerService, get_bid_ledger_service
from src.auc_bid.domain.models import Viewer
from src.auc_common.database import get_db_session
from src.auc_common.response import ApiResponse, respond
from src.auc_gateway.auth.dependencies import (
    get_current_viewer,
    get_optional_viewer,
    require_admin,
)

router = APIRouter(tags=["bids"])

LedgerService = Annotated[BidLedgerService, Depends(get_bid_ledger_service)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("/lots/{lot_id}/bids", status_code=status.HTTP_201_CREATED)
async def place_bid(
    lot_id: str,
    body: PlaceBidRequest,
    request: Request,
    viewer: Annotated[Viewer, Depends(get_current_viewer)],
    db: DbSession,
    service: LedgerService,
) -> ApiResponse:
    bid = await service.place_bid(
        db,
        lot_id,
        price=body.price,
        units_requested=body.units,
        bidder_name=body.bidder_name or viewer.display_name,
        bidder_identity=viewer.identity,
    )
    return respond(request, BidOut.from_domain(bid, viewer).model_dump())


@router.get("/lots/{lot_id}/bids")
async def get_bid_history(
    lot_id: str,
    request: Request,
    viewer: Annotated[Viewer, Depends(get_optional_viewer)],
    db: DbSession,
    service: LedgerService,
) -> ApiResponse:
    result = await service.get_bid_history(db, lot_id, viewer)
    return respond(request, result.model_dump())


@router.delete("/bids/{bid_id}")
async def remove_bid(
    bid_id: str,
    request: Request,
    admin: Annotated[Viewer, Depends(require_admin)],
    db: DbSession,
    service: LedgerService,
) -> ApiResponse:
    refresh = await service.remove_bid(db, bid_id, admin)
    result = RemoveBidResponse(bid_id=bid_id, lot_id=refresh.lot_id)
    return respond(request, result.model_dump(), message="Bid removed")
