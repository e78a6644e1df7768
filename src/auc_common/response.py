"""ApiResponse envelope shared by every endpoint.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "...", "request_id": "req_..."}

code is 0 on success, else the AppError code; data is null on error.
request_id is the one RequestLogMiddleware put on request.state.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.auc_common.errors import AppError


def _fallback_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=_fallback_request_id)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or _fallback_request_id()


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(data=data)


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None)


def respond(request: Request, data: Any = None, message: str | None = None) -> ApiResponse:
    """Success envelope tagged with the current request id."""
    resp = success_response(data)
    resp.request_id = _request_id(request)
    if message is not None:
        resp.message = message
    return resp


def error_json(request: Request, exc: AppError) -> JSONResponse:
    """Error envelope with the AppError's HTTP status."""
    resp = error_response(exc.code, exc.message)
    resp.request_id = _request_id(request)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())
