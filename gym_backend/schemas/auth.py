"""Authentication schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from gym_backend.models.enums import UserRole


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginResponse(Token):
    """Login response with the authenticated user's details."""

    user_id: int
    username: str
    name: Optional[str] = None
    role: UserRole
    gym_id: Optional[int] = None


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    exp: datetime
    type: str
    role: Optional[str] = None
    gym_id: Optional[int] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """Login request body."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    """Token refresh request."""

    refresh_token: str


class PasswordChange(BaseModel):
    """Password change request."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
