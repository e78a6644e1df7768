"""JWT verification for tokens issued by the external identity provider.

The service never authenticates anyone itself. It only decodes a bearer
token into a Viewer: ``sub`` is the stable identity, ``name`` the display
name and ``is_admin`` the administrator flag.

MVP NOTE: HS256 with a shared JWT_SECRET. No revocation: a token stays
valid until its ``exp``.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from config.settings import settings
from src.auc_bid.domain.models import Viewer
from src.auc_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(
    identity: str, name: str | None = None, is_admin: bool = False
) -> str:
    """Mint a token the way the identity provider does (local tooling and tests)."""
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": identity,
        "is_admin": is_admin,
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    if name:
        payload["name"] = name
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a bearer token.

    Raises:
        InvalidCredentialsError: signature, expiry or ``sub`` claim invalid.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if not payload.get("sub"):
        raise InvalidCredentialsError()
    return payload


def viewer_from_token(token: str) -> Viewer:
    payload = decode_token(token)
    return Viewer(
        identity=str(payload["sub"]),
        is_admin=payload.get("is_admin") is True,
        display_name=payload.get("name") or None,
    )
