"""Trainer endpoints."""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from gym_backend.dependencies import (
    DbSession,
    CurrentUser,
    ManagerUser,
    resolve_gym_scope,
    ensure_gym_access,
)
from gym_backend.models import Trainer, User
from gym_backend.schemas.trainer import (
    TrainerCreate,
    TrainerUpdate,
    TrainerRating,
    TrainerResponse,
)
from gym_backend.services.trainer_service import TrainerService

router = APIRouter()
trainer_service = TrainerService()


def _get_trainer(db, trainer_id: int, current_user: User) -> Trainer:
    trainer = trainer_service.get(db, trainer_id)
    if not trainer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trainer not found",
        )
    ensure_gym_access(current_user, trainer.gym_id)
    return trainer


@router.get("", response_model=List[TrainerResponse])
async def list_trainers(
    db: DbSession,
    current_user: CurrentUser,
    active_only: bool = False,
    specialization: Optional[str] = None,
    gym_id: Optional[int] = None,
) -> List[TrainerResponse]:
    """List trainers, optionally only active ones or by specialization."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    trainers = trainer_service.list_trainers(
        db, gym_id=gym_id, active_only=active_only, specialization=specialization
    )
    return [TrainerResponse.model_validate(t) for t in trainers]


@router.get("/top-rated", response_model=List[TrainerResponse])
async def list_top_rated_trainers(
    db: DbSession,
    current_user: CurrentUser,
    min_rating: Decimal = Query(Decimal("4.0"), ge=0, le=5),
    gym_id: Optional[int] = None,
) -> List[TrainerResponse]:
    """Active trainers rated at least ``min_rating``."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    trainers = trainer_service.get_top_rated(db, min_rating, gym_id=gym_id)
    return [TrainerResponse.model_validate(t) for t in trainers]


@router.post("", response_model=TrainerResponse, status_code=status.HTTP_201_CREATED)
async def create_trainer(
    trainer_in: TrainerCreate,
    db: DbSession,
    current_user: ManagerUser,
) -> TrainerResponse:
    """Create a trainer profile."""
    data = trainer_in.model_dump()
    data["gym_id"] = resolve_gym_scope(current_user, trainer_in.gym_id)
    try:
        trainer = trainer_service.create_trainer(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TrainerResponse.model_validate(trainer)


@router.get("/{trainer_id}", response_model=TrainerResponse)
async def get_trainer(
    trainer_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> TrainerResponse:
    """Get a trainer by ID."""
    return TrainerResponse.model_validate(_get_trainer(db, trainer_id, current_user))


@router.patch("/{trainer_id}", response_model=TrainerResponse)
async def update_trainer(
    trainer_id: int,
    trainer_in: TrainerUpdate,
    db: DbSession,
    current_user: ManagerUser,
) -> TrainerResponse:
    """Update a trainer profile."""
    trainer = _get_trainer(db, trainer_id, current_user)
    try:
        trainer = trainer_service.update_trainer(
            db, trainer, trainer_in.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TrainerResponse.model_validate(trainer)


@router.post("/{trainer_id}/ratings", response_model=TrainerResponse)
async def rate_trainer(
    trainer_id: int,
    rating_in: TrainerRating,
    db: DbSession,
    current_user: CurrentUser,
) -> TrainerResponse:
    """Add a rating to a trainer's average."""
    trainer = _get_trainer(db, trainer_id, current_user)
    trainer = trainer_service.add_rating(db, trainer, rating_in.rating)
    return TrainerResponse.model_validate(trainer)


@router.delete("/{trainer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trainer(
    trainer_id: int,
    db: DbSession,
    current_user: ManagerUser,
) -> None:
    """Delete a trainer profile."""
    _get_trainer(db, trainer_id, current_user)
    trainer_service.delete(db, trainer_id)
