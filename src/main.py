"""Auction API application.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.auc_bid.api.router import router as bid_router
from src.auc_common.database import engine
from src.auc_common.datetime_utils import utc_now
from src.auc_common.errors import AppError, StorageError
from src.auc_common.redis_client import close_redis, get_redis, redis_available
from src.auc_common.response import ApiResponse, error_json, respond
from src.auc_gateway.middleware.request_log import RequestLogMiddleware
from src.auc_lot.api.router import router as lot_router
from src.auc_settlement.api.admin_router import router as admin_router
from src.auc_settlement.api.router import router as settlement_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Fail fast if PostgreSQL is unreachable; Redis only carries notifications."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_json(request, exc)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Reads run outside unit_of_work, so their driver errors land here
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return error_json(request, StorageError())


for _router in (lot_router, bid_router, settlement_router, admin_router):
    app.include_router(_router, prefix=API_PREFIX)


@app.get("/health")
async def health() -> dict[str, str]:
    return {
        "status": "ok",
        "version": "0.1.0",
        "notifications": "up" if await redis_available() else "down",
    }


@app.get("/time")
async def server_time(request: Request) -> ApiResponse:
    """Clients compute time-to-close against this, not their own clock."""
    return respond(request, {"server_time": utc_now().isoformat()})
