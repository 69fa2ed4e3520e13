# backend/studiosync/services/auth_service.py
"""
Authentication Service for StudioSync

Registration, credential checks, token issuance and profile updates.
Logging out bumps the user's ``token_version``, which every issued token
carries as ``ver``; tokens with an older version are refused.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..auth import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from ..core.config import settings
from ..core.exceptions import ConflictException, UnauthorizedException
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.auth import ProfileUpdate, RegisterRequest, TokenPair
from .base import BaseService
from .studio_service import non_null_changes

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("register_user")
    def register_user(self, data: RegisterRequest) -> User:
        if self.user_repository.get_by_email(data.email):
            raise ConflictException(
                "A user with this email already exists", details={"field": "email"}
            )
        with self.transaction():
            user = self.user_repository.create(
                email=data.email,
                hashed_password=get_password_hash(data.password),
                first_name=data.first_name,
                last_name=data.last_name,
                phone=data.phone,
                role=data.role,
            )
        self.logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user

    @BaseService.measure_operation("authenticate_user")
    def authenticate_user(self, email: str, password: str) -> User:
        user = self.user_repository.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedException("Invalid email or password")
        if not user.is_active:
            raise UnauthorizedException("Account is disabled")
        return user

    def issue_tokens(self, user: User) -> TokenPair:
        version = user.token_version or 0
        return TokenPair(
            access_token=create_access_token(user.id, version),
            refresh_token=create_refresh_token(user.id, version),
            expires_in=settings.access_token_expire_minutes * 60,
        )

    def refresh_tokens(self, refresh_token: str) -> TokenPair:
        payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        user = self._active_user_for(payload)
        return self.issue_tokens(user)

    def user_for_access_token(self, token: str) -> User:
        """Resolve the user behind an access token or raise UnauthorizedException."""
        return self._active_user_for(decode_token(token))

    def _active_user_for(self, payload: dict) -> User:
        user: Optional[User] = self.user_repository.get_by_id(payload["sub"])
        if user is None or not user.is_active:
            raise UnauthorizedException("User not found or inactive")
        if payload.get("ver", 0) != (user.token_version or 0):
            raise UnauthorizedException("Token has been revoked")
        return user

    @BaseService.measure_operation("update_profile")
    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        changes = non_null_changes(
            data.model_dump(exclude_unset=True), nullable={"phone", "avatar"}
        )
        if not changes:
            return user
        with self.transaction():
            for key, value in changes.items():
                setattr(user, key, value)
        self.log_operation("update_profile", user_id=user.id, fields=sorted(changes))
        return user

    def logout(self, user: User) -> None:
        with self.transaction():
            version = self.user_repository.bump_token_version(user)
        self.logger.info(f"User {user.id} logged out; token version now {version}")
