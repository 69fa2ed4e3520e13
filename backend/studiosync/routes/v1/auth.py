# backend/studiosync/routes/v1/auth.py
"""
Authentication routes - API v1

Registration, login, token refresh, profile and logout.
"""

import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_auth_service, get_current_active_user
from ...models.user import User
from ...schemas.auth import (
    AuthResult,
    LoginRequest,
    ProfileUpdate,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UserResponse,
)
from ...schemas.base_responses import ApiResponse
from ...services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth-v1"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthResult],
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthResult]:
    """Create an account and sign it in. ADMIN cannot be self-assigned."""
    user = auth_service.register_user(payload)
    result = AuthResult(user=UserResponse.model_validate(user), tokens=auth_service.issue_tokens(user))
    return ApiResponse(data=result, message="User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthResult])
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthResult]:
    user = auth_service.authenticate_user(payload.email, payload.password)
    result = AuthResult(user=UserResponse.model_validate(user), tokens=auth_service.issue_tokens(user))
    return ApiResponse(data=result, message="Login successful")


@router.post("/refresh", response_model=ApiResponse[TokenPair])
def refresh(
    payload: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[TokenPair]:
    return ApiResponse(data=auth_service.refresh_tokens(payload.refresh_token))


@router.get("/profile", response_model=ApiResponse[UserResponse])
def get_profile(current_user: User = Depends(get_current_active_user)) -> ApiResponse[UserResponse]:
    return ApiResponse(data=UserResponse.model_validate(current_user))


@router.patch("/profile", response_model=ApiResponse[UserResponse])
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[UserResponse]:
    user = auth_service.update_profile(current_user, payload)
    return ApiResponse(data=UserResponse.model_validate(user), message="Profile updated")


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    current_user: User = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[None]:
    """Revoke every token issued to the caller so far."""
    auth_service.logout(current_user)
    return ApiResponse(message="Logged out successfully")
