"""auc_lot REST endpoints.

GET    /lots            — blind lot listing (open first, newest first)
POST   /lots            — create lot (admin)
GET    /lots/{lot_id}   — single lot, same blind view as the listing
DELETE /lots/{lot_id}   — delete lot and its bids (admin)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_bid.domain.models import Viewer
from src.auc_common.database import get_db_session
from src.auc_common.response import ApiResponse, respond
from src.auc_gateway.auth.dependencies import get_optional_viewer, require_admin
from src.auc_lot.application.schemas import CreateLotRequest
from src.auc_lot.application.service import LotApplicationService, get_lot_service

router = APIRouter(prefix="/lots", tags=["lots"])

LotService = Annotated[LotApplicationService, Depends(get_lot_service)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("")
async def list_lots(
    request: Request,
    viewer: Annotated[Viewer, Depends(get_optional_viewer)],
    db: DbSession,
    service: LotService,
) -> ApiResponse:
    result = await service.list_lots(db)
    return respond(request, result.model_dump())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_lot(
    body: CreateLotRequest,
    request: Request,
    admin: Annotated[Viewer, Depends(require_admin)],
    db: DbSession,
    service: LotService,
) -> ApiResponse:
    result = await service.create_lot(db, body)
    return respond(request, result.model_dump())


@router.get("/{lot_id}")
async def get_lot(
    lot_id: str,
    request: Request,
    viewer: Annotated[Viewer, Depends(get_optional_viewer)],
    db: DbSession,
    service: LotService,
) -> ApiResponse:
    result = await service.get_lot(db, lot_id)
    return respond(request, result.model_dump())


@router.delete("/{lot_id}")
async def delete_lot(
    lot_id: str,
    request: Request,
    admin: Annotated[Viewer, Depends(require_admin)],
    db: DbSession,
    service: LotService,
) -> ApiResponse:
    await service.delete_lot(db, lot_id)
    return respond(request, {"lot_id": lot_id}, message="Lot deleted")
