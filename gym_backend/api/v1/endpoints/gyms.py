"""Gym (tenant) endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, status

from gym_backend.dependencies import DbSession, CurrentUser, SuperUser, ManagerUser, ensure_gym_access
from gym_backend.schemas.gym import GymCreate, GymUpdate, GymResponse, GymStats
from gym_backend.services.gym_service import GymService

router = APIRouter()
gym_service = GymService()


def _get_gym(db, gym_id: int):
    gym = gym_service.get(db, gym_id)
    if not gym:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Gym not found",
        )
    return gym


@router.get("", response_model=List[GymResponse])
async def list_gyms(
    db: DbSession,
    current_user: CurrentUser,
    include_inactive: bool = False,
) -> List[GymResponse]:
    """List gyms; non super users only see their own gym."""
    if not current_user.is_super_user:
        gym = gym_service.get(db, current_user.gym_id) if current_user.gym_id else None
        return [GymResponse.model_validate(gym)] if gym else []
    if include_inactive:
        gyms = gym_service.get_multi(db, limit=1000)
    else:
        gyms = gym_service.list_active(db)
    return [GymResponse.model_validate(g) for g in gyms]


@router.post("", response_model=GymResponse, status_code=status.HTTP_201_CREATED)
async def create_gym(
    gym_in: GymCreate,
    db: DbSession,
    current_user: SuperUser,
) -> GymResponse:
    """Create a gym (super user only)."""
    try:
        gym = gym_service.create_gym(db, gym_in.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return GymResponse.model_validate(gym)


@router.get("/{gym_id}", response_model=GymResponse)
async def get_gym(
    gym_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> GymResponse:
    """Get a gym by ID."""
    ensure_gym_access(current_user, gym_id)
    return GymResponse.model_validate(_get_gym(db, gym_id))


@router.get("/{gym_id}/stats", response_model=GymStats)
async def get_gym_stats(
    gym_id: int,
    db: DbSession,
    current_user: ManagerUser,
) -> GymStats:
    """Dashboard statistics for a gym."""
    ensure_gym_access(current_user, gym_id)
    _get_gym(db, gym_id)
    return GymStats(**gym_service.get_stats(db, gym_id))


@router.patch("/{gym_id}", response_model=GymResponse)
async def update_gym(
    gym_id: int,
    gym_in: GymUpdate,
    db: DbSession,
    current_user: SuperUser,
) -> GymResponse:
    """Update a gym (super user only)."""
    gym = _get_gym(db, gym_id)
    try:
        gym = gym_service.update_gym(db, gym, gym_in.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return GymResponse.model_validate(gym)


@router.delete("/{gym_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gym(
    gym_id: int,
    db: DbSession,
    current_user: SuperUser,
) -> None:
    """Deactivate a gym (super user only)."""
    gym = _get_gym(db, gym_id)
    gym_service.update(db, gym, {"is_active": False})
