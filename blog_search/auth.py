# blog_search/auth.py
"""
Bearer token handling.

Tokens are issued by the account service; this service only verifies them.
The ``sub`` claim carries the user id, which is passed explicitly to the
search services as the acting user.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
import jwt
from jwt import PyJWTError

from .core.config import settings
from .core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and verify a JWT access token. Raises PyJWTError on failure."""
    payload_raw = jwt.decode(
        token,
        _secret_value(settings.secret_key),
        algorithms=[settings.algorithm],
        options={"verify_aud": False},
    )
    return cast(Dict[str, Any], payload_raw)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Used by tests and local tooling; production tokens come from the
    account service and share the same secret.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return cast(
        str,
        jwt.encode(to_encode, _secret_value(settings.secret_key), algorithm=settings.algorithm),
    )


def _actor_id_from_token(token: str) -> Optional[str]:
    payload = decode_access_token(token)
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        logger.warning("Token payload missing 'sub' field")
        return None
    return sub


async def get_current_actor_id_optional(
    token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[str]:
    """
    Dependency returning the caller's user id, or None.

    Missing, expired or malformed tokens all mean "anonymous" here.
    """
    if not token:
        return None
    try:
        return _actor_id_from_token(token)
    except PyJWTError as e:
        logger.debug(f"JWT validation error in optional auth: {str(e)}")
        return None


async def get_current_actor_id(
    actor_id: Optional[str] = Depends(get_current_actor_id_optional),
) -> str:
    """
    Dependency returning the caller's user id.

    Raises:
        UnauthorizedException: if no valid token was presented
    """
    if actor_id is None:
        raise UnauthorizedException()
    return actor_id
