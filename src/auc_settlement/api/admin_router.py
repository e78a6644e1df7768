# src/auc_settlement/api/admin_router.py
"""Admin REST API: leader sync, consistency audit and settlement archive."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.domain.models import Viewer
from src.auc_common.database import get_db_session
from src.auc_common.response import ApiResponse, respond
from src.auc_gateway.auth.dependencies import require_admin
from src.auc_settlement.application.consistency import (
    ConsistencyService,
    get_consistency_service,
)
from src.auc_settlement.application.schemas import SyncResponse
from src.auc_settlement.application.service import SettlementService, get_settlement_service

router = APIRouter(prefix="/admin", tags=["admin"])

Admin = Annotated[Viewer, Depends(require_admin)]
Consistency = Annotated[ConsistencyService, Depends(get_consistency_service)]
Settlements = Annotated[SettlementService, Depends(get_settlement_service)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("/lots/{lot_id}/sync")
async def sync_lot(
    lot_id: str, request: Request, admin: Admin, db: DbSession, service: Consistency
) -> ApiResponse:
    refresh = await service.sync(db, lot_id)
    return respond(request, SyncResponse.from_refresh(refresh).model_dump())


@router.get("/lots/{lot_id}/consistency")
async def check_lot(
    lot_id: str, request: Request, admin: Admin, db: DbSession, service: Consistency
) -> ApiResponse:
    inconsistent = await service.is_inconsistent(db, lot_id)
    return respond(request, {"lot_id": lot_id, "inconsistent": inconsistent})


@router.post("/verify")
async def verify_closed_lots(
    request: Request, admin: Admin, db: DbSession, service: Consistency
) -> ApiResponse:
    result = await service.verify_closed_lots(db)
    result["faults_detected"] = service.faults_detected
    return respond(request, result)


@router.post("/archive")
async def archive_closed_lots(
    request: Request, admin: Admin, db: DbSession, service: Settlements
) -> ApiResponse:
    result = await service.archive_closed_lots(db)
    return respond(request, result.model_dump())


@router.get("/archive")
async def list_archive(
    request: Request,
    admin: Admin,
    db: DbSession,
    service: Settlements,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> ApiResponse:
    result = await service.list_archive(db, limit, offset)
    return respond(request, result.model_dump())
