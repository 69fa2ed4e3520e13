from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..models.user import UserRole
from ._strict_base import StrictModel, StrictRequestModel


class RegisterRequest(StrictRequestModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    role: UserRole = UserRole.ARTIST

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("role")
    @classmethod
    def _role_not_admin(cls, v: UserRole) -> UserRole:
        if v == UserRole.ADMIN:
            raise ValueError("ADMIN role cannot be self-assigned")
        return v


class LoginRequest(StrictRequestModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, v: str) -> str:
        return v.lower()


class RefreshRequest(StrictRequestModel):
    refresh_token: str = Field(min_length=1)


class ProfileUpdate(StrictRequestModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    avatar: Optional[str] = Field(default=None, max_length=500)


class UserResponse(StrictModel):
    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole
    is_active: bool
    email_verified: bool
    created_at: Optional[datetime] = None


class TokenPair(StrictModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class AuthResult(StrictModel):
    user: UserResponse
    tokens: TokenPair
