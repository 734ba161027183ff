"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm

from gym_backend.dependencies import DbSession, CurrentUser, TokenStore
from gym_backend.core.rate_limit import limiter
from gym_backend.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)
from gym_backend.config import settings
from gym_backend.models import User
from gym_backend.schemas.auth import LoginResponse, Token, RefreshRequest, PasswordChange
from gym_backend.schemas.common import Message
from gym_backend.schemas.user import UserResponse
from gym_backend.services.user_service import UserService

router = APIRouter()
user_service = UserService()


def _issue_tokens(user: User, token_store) -> tuple[str, str]:
    access_token = create_access_token(
        subject=user.id,
        additional_claims={
            "role": user.role.value,
            "gym_id": user.gym_id,
            "name": user.full_name or user.username,
        },
    )
    refresh_token = create_refresh_token(subject=user.id)
    if token_store is not None:
        token_store.store_access_token(user.username, access_token)
        token_store.store_refresh_token(user.username, refresh_token)
    return access_token, refresh_token


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbSession,
    token_store: TokenStore,
) -> LoginResponse:
    """Authenticate user and return JWT tokens."""
    user = user_service.get_by_username(db, form_data.username)

    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    access_token, refresh_token = _issue_tokens(user, token_store)
    if token_store is not None:
        token_store.store_user_session(
            user.username,
            {"user_id": user.id, "role": user.role.value, "gym_id": user.gym_id},
        )

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.access_token_expire_minutes * 60,
        user_id=user.id,
        username=user.username,
        name=user.full_name or None,
        role=user.role,
        gym_id=user.gym_id,
    )


@router.post("/refresh", response_model=Token)
async def refresh_token(
    body: RefreshRequest,
    db: DbSession,
    token_store: TokenStore,
) -> Token:
    """Refresh access token using refresh token."""
    payload = decode_token(body.refresh_token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    user = user_service.get(db, int(user_id))
    if user is None or not user.active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    if token_store is not None and not token_store.validate_refresh_token(
        user.username, body.refresh_token
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token has been revoked",
        )

    access_token, new_refresh_token = _issue_tokens(user, token_store)
    return Token(
        access_token=access_token,
        refresh_token=new_refresh_token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: CurrentUser,
) -> UserResponse:
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@router.put("/me/password", response_model=Message)
@limiter.limit(settings.password_change_rate_limit)
async def change_password(
    request: Request,
    body: PasswordChange,
    current_user: CurrentUser,
    db: DbSession,
) -> Message:
    """Change the current user's password."""
    if not verify_password(body.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    user_service.change_password(db, current_user, body.new_password)
    return Message(message="Password changed successfully")


@router.post("/logout", response_model=Message)
async def logout(
    current_user: CurrentUser,
    token_store: TokenStore,
) -> Message:
    """Logout user; stored tokens are revoked when the token store is enabled."""
    if token_store is not None:
        token_store.delete_tokens(current_user.username)
        token_store.delete_user_session(current_user.username)
    return Message(message="Successfully logged out")
