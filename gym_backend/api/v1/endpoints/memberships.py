"""Member membership endpoints."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, status

from gym_backend.dependencies import (
    DbSession,
    StaffUser,
    StaffOrTrainer,
    resolve_gym_scope,
    ensure_gym_access,
)
from gym_backend.models import Member, MemberMembership, User
from gym_backend.schemas.membership import (
    MemberMembershipCreate,
    MemberMembershipUpdate,
    MemberMembershipResponse,
)
from gym_backend.services.membership_service import MemberMembershipService

router = APIRouter()
membership_service = MemberMembershipService()


def _get_membership(db, membership_id: int, current_user: User) -> MemberMembership:
    membership = membership_service.get(db, membership_id)
    if not membership:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Membership not found",
        )
    ensure_gym_access(current_user, membership.gym_id)
    return membership


@router.get("", response_model=List[MemberMembershipResponse])
async def list_memberships(
    db: DbSession,
    current_user: StaffOrTrainer,
    member_id: Optional[int] = None,
    gym_id: Optional[int] = None,
) -> List[MemberMembershipResponse]:
    """List memberships, newest start first; optionally for one member."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    memberships = membership_service.list_memberships(db, gym_id=gym_id, member_id=member_id)
    return [MemberMembershipResponse.model_validate(m) for m in memberships]


@router.post("", response_model=MemberMembershipResponse, status_code=status.HTTP_201_CREATED)
async def create_membership(
    membership_in: MemberMembershipCreate,
    db: DbSession,
    current_user: StaffUser,
) -> MemberMembershipResponse:
    """Enrol a member in a plan."""
    member = db.query(Member).filter(Member.id == membership_in.member_id).first()
    if member is not None:
        ensure_gym_access(current_user, member.gym_id)
    if membership_in.gym_id is not None:
        resolve_gym_scope(current_user, membership_in.gym_id)
    try:
        membership = membership_service.create_membership(db, membership_in.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MemberMembershipResponse.model_validate(membership)


@router.get("/{membership_id}", response_model=MemberMembershipResponse)
async def get_membership(
    membership_id: int,
    db: DbSession,
    current_user: StaffOrTrainer,
) -> MemberMembershipResponse:
    """Get a membership by ID."""
    return MemberMembershipResponse.model_validate(
        _get_membership(db, membership_id, current_user)
    )


@router.patch("/{membership_id}", response_model=MemberMembershipResponse)
async def update_membership(
    membership_id: int,
    membership_in: MemberMembershipUpdate,
    db: DbSession,
    current_user: StaffUser,
) -> MemberMembershipResponse:
    """Update a membership; re-activation is refused if another is active."""
    membership = _get_membership(db, membership_id, current_user)
    try:
        membership = membership_service.update_membership(
            db, membership, membership_in.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MemberMembershipResponse.model_validate(membership)
