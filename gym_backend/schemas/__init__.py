"""Pydantic schemas for request/response validation."""

from gym_backend.schemas.auth import (
    Token,
    LoginResponse,
    TokenPayload,
    LoginRequest,
    RefreshRequest,
    PasswordChange,
)
from gym_backend.schemas.common import (
    Message,
    CountResponse,
    PaginatedResponse,
)
from gym_backend.schemas.user import UserCreate, UserUpdate, UserResponse

__all__ = [
    # Auth
    "Token",
    "LoginResponse",
    "TokenPayload",
    "LoginRequest",
    "RefreshRequest",
    "PasswordChange",
    # Users
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    # Common
    "Message",
    "CountResponse",
    "PaginatedResponse",
]
