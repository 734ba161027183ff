"""User management endpoints."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, status

from gym_backend.dependencies import DbSession, AdminUser, ensure_gym_access
from gym_backend.models import User, UserRole
from gym_backend.schemas.user import UserCreate, UserUpdate, UserResponse
from gym_backend.services.user_service import UserService

router = APIRouter()
user_service = UserService()


def _get_visible_user(db, user_id: int, current_user: User) -> User:
    user = user_service.get(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    ensure_gym_access(current_user, user.gym_id)
    return user


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: DbSession,
    current_user: AdminUser,
    search: Optional[str] = None,
) -> List[UserResponse]:
    """List users visible to the caller (admin only)."""
    if search:
        gym_id = None if current_user.is_super_user else current_user.gym_id
        users = user_service.search_users(db, search, gym_id=gym_id)
    else:
        users = user_service.list_visible_users(db, current_user)
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    db: DbSession,
    current_user: AdminUser,
) -> UserResponse:
    """Create a new user (admin only)."""
    gym_id = user_in.gym_id
    if not current_user.is_super_user:
        if user_in.role == UserRole.SUPER_USER:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only super users can create super users",
            )
        ensure_gym_access(current_user, gym_id if gym_id is not None else current_user.gym_id)
        gym_id = current_user.gym_id

    try:
        user = user_service.create_user(
            db,
            username=user_in.username,
            email=user_in.email,
            password=user_in.password,
            role=user_in.role,
            gym_id=gym_id,
            first_name=user_in.first_name,
            last_name=user_in.last_name,
            phone=user_in.phone,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: DbSession,
    current_user: AdminUser,
) -> UserResponse:
    """Get a user by ID (admin only)."""
    return UserResponse.model_validate(_get_visible_user(db, user_id, current_user))


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: DbSession,
    current_user: AdminUser,
) -> UserResponse:
    """Update a user (admin only)."""
    user = _get_visible_user(db, user_id, current_user)
    update_data = user_in.model_dump(exclude_unset=True)
    if update_data.get("role") == UserRole.SUPER_USER and not current_user.is_super_user:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only super users can grant the super user role",
        )
    try:
        user = user_service.update_user(db, user, update_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: DbSession,
    current_user: AdminUser,
) -> None:
    """Deactivate a user (admin only). Users are never hard-deleted."""
    user = _get_visible_user(db, user_id, current_user)
    if user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )
    user_service.deactivate(db, user)
