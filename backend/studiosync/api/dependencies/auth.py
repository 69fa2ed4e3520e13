# backend/studiosync/api/dependencies/auth.py
"""
Authentication and authorization dependencies.

The bearer token is read without FastAPI's automatic 403 so that a missing
or malformed header surfaces as UNAUTHORIZED through the error envelope.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...core.exceptions import ForbiddenException, UnauthorizedException
from ...models.user import User, UserRole
from ...services.auth_service import AuthService
from .services import get_auth_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the authenticated user from the Authorization header.

    Raises:
        UnauthorizedException: header missing, token invalid, or user gone
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Authentication required")
    return auth_service.user_for_access_token(credentials.credentials)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise ForbiddenException("Inactive user")
    return current_user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory allowing only the given roles through."""
    allowed = set(roles)

    def verify_role(current_user: User = Depends(get_current_active_user)) -> User:
        if current_user.role not in allowed:
            logger.info(
                f"User {current_user.id} with role {current_user.role.value} denied; "
                f"requires one of {sorted(role.value for role in allowed)}"
            )
            raise ForbiddenException("Insufficient permissions for this action")
        return current_user

    return verify_role
