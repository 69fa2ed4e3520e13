"""
Password hashing and JWT issuance.

Tokens carry ``sub`` (user id), ``type`` (access or refresh), ``ver``
(the user's token_version at issue time) and ``exp``.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from .core.config import settings
from .core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _secret_value() -> str:
    return settings.secret_key.get_secret_value()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Malformed hashes count as a mismatch.
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except (ValueError, TypeError) as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def get_password_hash(password: str) -> str:
    return str(pwd_context.hash(password))


def _encode(claims: Dict[str, Any], expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return cast(str, jwt.encode(to_encode, _secret_value(), algorithm=settings.algorithm))


def create_access_token(
    user_id: str, token_version: int = 0, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a short-lived access token for ``user_id``."""
    delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    token = _encode({"sub": user_id, "type": ACCESS_TOKEN_TYPE, "ver": token_version}, delta)
    logger.debug(f"Created access token for user: {user_id}")
    return token


def create_refresh_token(
    user_id: str, token_version: int = 0, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a refresh token; only accepted by the refresh endpoint."""
    delta = expires_delta or timedelta(days=settings.refresh_token_expire_days)
    return _encode({"sub": user_id, "type": REFRESH_TOKEN_TYPE, "ver": token_version}, delta)


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
    """
    Decode and validate a token.

    Raises:
        UnauthorizedException: expired, tampered, or of the wrong type
    """
    try:
        payload = cast(
            Dict[str, Any],
            jwt.decode(token, _secret_value(), algorithms=[settings.algorithm]),
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedException("Token has expired")
    except PyJWTError as e:
        logger.debug(f"Rejected token: {str(e)}")
        raise UnauthorizedException("Invalid token")

    if payload.get("type") != expected_type or not payload.get("sub"):
        raise UnauthorizedException("Invalid token")
    return payload
