"""Membership plan endpoints."""

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
from gym_backend.models import MembershipPlan, User
from gym_backend.schemas.membership import (
    MembershipPlanCreate,
    MembershipPlanUpdate,
    MembershipPlanResponse,
)
from gym_backend.services.membership_service import MembershipPlanService

router = APIRouter()
plan_service = MembershipPlanService()


def _get_plan(db, plan_id: int, current_user: User) -> MembershipPlan:
    plan = plan_service.get(db, plan_id)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Membership plan not found",
        )
    ensure_gym_access(current_user, plan.gym_id)
    return plan


@router.get("", response_model=List[MembershipPlanResponse])
async def list_membership_plans(
    db: DbSession,
    current_user: CurrentUser,
    include_inactive: bool = False,
    gym_id: Optional[int] = None,
) -> List[MembershipPlanResponse]:
    """List membership plans, cheapest first."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    plans = plan_service.list_plans(db, gym_id=gym_id, active_only=not include_inactive)
    return [MembershipPlanResponse.model_validate(p) for p in plans]


@router.get("/price-range", response_model=List[MembershipPlanResponse])
async def list_plans_by_price_range(
    db: DbSession,
    current_user: CurrentUser,
    min_price: Decimal = Query(..., ge=0),
    max_price: Decimal = Query(..., ge=0),
    gym_id: Optional[int] = None,
) -> List[MembershipPlanResponse]:
    """Active plans priced within [min_price, max_price]."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    try:
        plans = plan_service.get_by_price_range(db, min_price, max_price, gym_id=gym_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [MembershipPlanResponse.model_validate(p) for p in plans]


@router.post("", response_model=MembershipPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_membership_plan(
    plan_in: MembershipPlanCreate,
    db: DbSession,
    current_user: ManagerUser,
) -> MembershipPlanResponse:
    """Create a membership plan."""
    data = plan_in.model_dump()
    data["gym_id"] = resolve_gym_scope(current_user, plan_in.gym_id)
    try:
        plan = plan_service.create(db, {**data, "is_active": True})
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MembershipPlanResponse.model_validate(plan)


@router.get("/{plan_id}", response_model=MembershipPlanResponse)
async def get_membership_plan(
    plan_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> MembershipPlanResponse:
    """Get a membership plan by ID."""
    return MembershipPlanResponse.model_validate(_get_plan(db, plan_id, current_user))


@router.patch("/{plan_id}", response_model=MembershipPlanResponse)
async def update_membership_plan(
    plan_id: int,
    plan_in: MembershipPlanUpdate,
    db: DbSession,
    current_user: ManagerUser,
) -> MembershipPlanResponse:
    """Update a membership plan."""
    plan = _get_plan(db, plan_id, current_user)
    try:
        plan = plan_service.update(db, plan, plan_in.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MembershipPlanResponse.model_validate(plan)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_membership_plan(
    plan_id: int,
    db: DbSession,
    current_user: ManagerUser,
) -> None:
    """Delete a membership plan."""
    _get_plan(db, plan_id, current_user)
    plan_service.delete(db, plan_id)
