"""FastAPI dependencies resolving the calling Viewer.

Usage in a router:
    from src.auc_gateway.auth.dependencies import get_optional_viewer

    @router.get("/lots/{lot_id}/bids")
    async def history(viewer: Viewer = Depends(get_optional_viewer)):
        ...

Read endpoints accept anonymous callers; a bad token is still a 401
rather than a silent downgrade to anonymous.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.auc_bid.domain.models import ANONYMOUS, Viewer
from src.auc_common.errors import AdminRequiredError, InvalidCredentialsError
from src.auc_gateway.auth.jwt_handler import viewer_from_token

# Tokens come from the identity provider; tokenUrl only feeds Swagger UI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_optional_viewer(token: str | None = Depends(oauth2_scheme)) -> Viewer:
    """Viewer for the bearer token, or ANONYMOUS when none is sent."""
    if not token:
        return ANONYMOUS
    try:
        return viewer_from_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None


async def get_current_viewer(viewer: Viewer = Depends(get_optional_viewer)) -> Viewer:
    """Raises HTTP 401 if no token was sent."""
    if viewer.is_anonymous:
        raise _CREDENTIALS_EXCEPTION
    return viewer


async def require_admin(viewer: Viewer = Depends(get_current_viewer)) -> Viewer:
    """Raises AdminRequiredError (1002 / 403) for non-admin callers."""
    if not viewer.is_admin:
        raise AdminRequiredError()
    return viewer
