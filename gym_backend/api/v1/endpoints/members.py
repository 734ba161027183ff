"""Member endpoints."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from gym_backend.config import settings
from gym_backend.dependencies import (
    DbSession,
    StaffUser,
    StaffOrTrainer,
    ManagerUser,
    MemberServiceDep,
    resolve_gym_scope,
    ensure_gym_access,
)
from gym_backend.models import Member, MemberStatus, User
from gym_backend.schemas.common import CountResponse
from gym_backend.schemas.member import (
    MemberCreate,
    MemberUpdate,
    MemberResponse,
    MemberListResponse,
    NextMemberCode,
)

router = APIRouter()


def _get_member(member_service, db, member_id: int, current_user: User) -> Member:
    member = member_service.get(db, member_id)
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found",
        )
    ensure_gym_access(current_user, member.gym_id)
    return member


@router.get("", response_model=MemberListResponse)
async def list_members(
    db: DbSession,
    current_user: StaffOrTrainer,
    member_service: MemberServiceDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    search: Optional[str] = None,
    status_filter: Optional[MemberStatus] = Query(None, alias="status"),
    gym_id: Optional[int] = None,
) -> MemberListResponse:
    """List members with pagination, search and status filtering."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    members, total = member_service.search_members(
        db,
        search_term=search,
        gym_id=gym_id,
        status=status_filter,
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    total_pages = (total + page_size - 1) // page_size if page_size > 0 else 0
    return MemberListResponse(
        items=[MemberResponse.model_validate(m) for m in members],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    member_in: MemberCreate,
    db: DbSession,
    current_user: StaffUser,
    member_service: MemberServiceDep,
) -> MemberResponse:
    """
    Register a member.

    The member code is generated here; a 503 is returned when no code can
    be allocated.
    """
    data = member_in.model_dump()
    data["gym_id"] = resolve_gym_scope(current_user, member_in.gym_id)
    try:
        member = member_service.create_member(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MemberResponse.model_validate(member)


@router.get("/next-code", response_model=NextMemberCode)
async def preview_next_member_code(
    current_user: StaffUser,
    member_service: MemberServiceDep,
) -> NextMemberCode:
    """Code the next registration would try first. Nothing is reserved."""
    return NextMemberCode(member_code=member_service.code_generator.preview_next_code())


@router.get("/code/{member_code}", response_model=MemberResponse)
async def get_member_by_code(
    member_code: str,
    db: DbSession,
    current_user: StaffOrTrainer,
    member_service: MemberServiceDep,
) -> MemberResponse:
    """Look a member up by member code."""
    member = member_service.get_by_code(db, member_code.strip().upper())
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found",
        )
    ensure_gym_access(current_user, member.gym_id)
    return MemberResponse.model_validate(member)


@router.get("/expiring", response_model=List[MemberResponse])
async def list_members_with_expiring_memberships(
    db: DbSession,
    current_user: StaffUser,
    member_service: MemberServiceDep,
    days: int = Query(settings.expiring_membership_days, ge=0, le=365),
    gym_id: Optional[int] = None,
) -> List[MemberResponse]:
    """Active members whose active membership ends within ``days``."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    members = member_service.get_members_with_expiring_memberships(db, days, gym_id=gym_id)
    return [MemberResponse.model_validate(m) for m in members]


@router.get("/count/active", response_model=CountResponse)
async def count_active_members(
    db: DbSession,
    current_user: StaffUser,
    member_service: MemberServiceDep,
    gym_id: Optional[int] = None,
) -> CountResponse:
    """Number of active members."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    return CountResponse(count=member_service.count_active(db, gym_id=gym_id))


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: DbSession,
    current_user: StaffOrTrainer,
    member_service: MemberServiceDep,
) -> MemberResponse:
    """Get a member by ID."""
    return MemberResponse.model_validate(_get_member(member_service, db, member_id, current_user))


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: int,
    member_in: MemberUpdate,
    db: DbSession,
    current_user: StaffUser,
    member_service: MemberServiceDep,
) -> MemberResponse:
    """Update a member. The member code is immutable."""
    member = _get_member(member_service, db, member_id, current_user)
    try:
        member = member_service.update_member(db, member, member_in.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MemberResponse.model_validate(member)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(
    member_id: int,
    db: DbSession,
    current_user: ManagerUser,
    member_service: MemberServiceDep,
) -> None:
    """Delete a member together with their memberships, payments and attendance."""
    _get_member(member_service, db, member_id, current_user)
    member_service.delete(db, member_id)
