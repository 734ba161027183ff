"""FastAPI dependencies for database, authentication and gym scoping."""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from gym_backend.database import SessionLocal
from gym_backend.core.security import decode_token
from gym_backend.core.token_store import RedisTokenStore
from gym_backend.models import User, UserRole
from gym_backend.services.member_service import MemberService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token_store(request: Request) -> Optional[RedisTokenStore]:
    """Token store created at startup, None when Redis is not configured."""
    return getattr(request.app.state, "token_store", None)


def get_member_service(request: Request) -> MemberService:
    """Member service bound to the process-wide member code generator."""
    return MemberService(code_generator=request.app.state.member_code_generator)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
    token_store: Annotated[Optional[RedisTokenStore], Depends(get_token_store)],
) -> User:
    """Get the current authenticated user from JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(token)
    if payload is None:
        raise credentials_exception

    token_type = payload.get("type")
    if token_type != "access":
        raise credentials_exception

    user_id: Optional[str] = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise credentials_exception

    # Logged-out or superseded tokens are no longer in the store
    if token_store is not None and not token_store.validate_access_token(user.username, token):
        raise credentials_exception

    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Ensure current user is active."""
    if not current_user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )
    return current_user


def require_role(*allowed_roles: UserRole):
    """Dependency factory to require specific user roles."""

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_active_user)],
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role {current_user.role.value} not authorized for this action",
            )
        return current_user

    return role_checker


def resolve_gym_scope(current_user: User, gym_id: Optional[int] = None) -> Optional[int]:
    """
    Gym a request operates on.

    Super users may name any gym, or none for all gyms. Everyone else is
    pinned to their own gym and gets 403 for any other.
    """
    if current_user.is_super_user:
        return gym_id
    if gym_id is not None and gym_id != current_user.gym_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this gym",
        )
    return current_user.gym_id


def ensure_gym_access(current_user: User, gym_id: Optional[int]) -> None:
    """403 unless the user may act on records owned by ``gym_id``."""
    if current_user.is_super_user:
        return
    if gym_id != current_user.gym_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this gym",
        )


# Common dependency annotations
DbSession = Annotated[Session, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_active_user)]
TokenStore = Annotated[Optional[RedisTokenStore], Depends(get_token_store)]
MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
SuperUser = Annotated[User, Depends(require_role(UserRole.SUPER_USER))]
AdminUser = Annotated[User, Depends(require_role(UserRole.SUPER_USER, UserRole.ADMIN))]
ManagerUser = Annotated[
    User, Depends(require_role(UserRole.SUPER_USER, UserRole.ADMIN, UserRole.MANAGER))
]
StaffUser = Annotated[
    User,
    Depends(
        require_role(
            UserRole.SUPER_USER, UserRole.ADMIN, UserRole.MANAGER, UserRole.RECEPTIONIST
        )
    ),
]
StaffOrTrainer = Annotated[
    User,
    Depends(
        require_role(
            UserRole.SUPER_USER,
            UserRole.ADMIN,
            UserRole.MANAGER,
            UserRole.RECEPTIONIST,
            UserRole.TRAINER,
        )
    ),
]
