"""auc_settlement public endpoints.

GET /lots/{lot_id}/winners — allocation of a closed lot
GET /auction/summary       — totals across lots plus the caller's own bids
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.domain.models import Viewer
from src.auc_common.database import get_db_session
from src.auc_common.response import ApiResponse, respond
from src.auc_gateway.auth.dependencies import get_optional_viewer
from src.auc_settlement.application.service import SettlementService, get_settlement_service

router = APIRouter(tags=["settlement"])

Settlements = Annotated[SettlementService, Depends(get_settlement_service)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/lots/{lot_id}/winners")
async def get_winners(
    lot_id: str,
    request: Request,
    db: DbSession,
    service: Settlements,
) -> ApiResponse:
    result = await service.get_winners(db, lot_id)
    return respond(request, result.model_dump())


@router.get("/auction/summary")
async def get_summary(
    request: Request,
    viewer: Annotated[Viewer, Depends(get_optional_viewer)],
    db: DbSession,
    service: Settlements,
) -> ApiResponse:
    result = await service.summary(db, viewer)
    return respond(request, result.model_dump())
