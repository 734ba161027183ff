"""Attendance endpoints (check-in / check-out)."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from gym_backend.dependencies import (
    DbSession,
    StaffOrTrainer,
    resolve_gym_scope,
    ensure_gym_access,
)
from gym_backend.models import Member, User
from gym_backend.schemas.attendance import (
    CheckInRequest,
    CheckOutRequest,
    AttendanceResponse,
    AttendanceCounts,
)
from gym_backend.services.attendance_service import AttendanceService

router = APIRouter()
attendance_service = AttendanceService()


def _find_member(db, member_id: Optional[int], member_code: Optional[str], current_user: User) -> Member:
    if member_id is None and not member_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="member_id or member_code is required",
        )
    query = db.query(Member)
    if member_id is not None:
        member = query.filter(Member.id == member_id).first()
    else:
        member = query.filter(Member.member_code == member_code.strip().upper()).first()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found",
        )
    ensure_gym_access(current_user, member.gym_id)
    return member


@router.post("/check-in", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
async def check_in(
    body: CheckInRequest,
    db: DbSession,
    current_user: StaffOrTrainer,
) -> AttendanceResponse:
    """Check a member in."""
    member = _find_member(db, body.member_id, body.member_code, current_user)
    try:
        record = attendance_service.check_in(db, member, method=body.method, notes=body.notes)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AttendanceResponse.model_validate(record)


@router.post("/check-out", response_model=AttendanceResponse)
async def check_out(
    body: CheckOutRequest,
    db: DbSession,
    current_user: StaffOrTrainer,
) -> AttendanceResponse:
    """Check a member out of their open visit."""
    member = _find_member(db, body.member_id, body.member_code, current_user)
    try:
        record = attendance_service.check_out(db, member)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AttendanceResponse.model_validate(record)


@router.post("/{attendance_id}/check-out", response_model=AttendanceResponse)
async def check_out_record(
    attendance_id: int,
    db: DbSession,
    current_user: StaffOrTrainer,
) -> AttendanceResponse:
    """Close a specific attendance record."""
    record = attendance_service.get(db, attendance_id)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Attendance record not found",
        )
    ensure_gym_access(current_user, record.gym_id)
    try:
        record = attendance_service.check_out_record(db, record)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AttendanceResponse.model_validate(record)


@router.get("/date", response_model=List[AttendanceResponse])
async def attendance_by_date(
    db: DbSession,
    current_user: StaffOrTrainer,
    day: Optional[date] = Query(None, alias="date"),
    gym_id: Optional[int] = None,
) -> List[AttendanceResponse]:
    """Check-ins on a day (default today)."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    records = attendance_service.get_attendance_by_date(db, day or date.today(), gym_id=gym_id)
    return [AttendanceResponse.model_validate(r) for r in records]


@router.get("/current", response_model=List[AttendanceResponse])
async def currently_checked_in(
    db: DbSession,
    current_user: StaffOrTrainer,
    gym_id: Optional[int] = None,
) -> List[AttendanceResponse]:
    """Open visits."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    return [
        AttendanceResponse.model_validate(r)
        for r in attendance_service.currently_checked_in(db, gym_id=gym_id)
    ]


@router.get("/counts", response_model=AttendanceCounts)
async def attendance_counts(
    db: DbSession,
    current_user: StaffOrTrainer,
    day: Optional[date] = Query(None, alias="date"),
    gym_id: Optional[int] = None,
) -> AttendanceCounts:
    """Check-in and distinct member counts for a day (default today)."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    day = day or date.today()
    return AttendanceCounts(
        date=day,
        gym_id=gym_id,
        check_ins=attendance_service.count_for_date(db, day, gym_id=gym_id),
        members=attendance_service.count_members_for_date(db, day, gym_id=gym_id),
    )


@router.get("/member/{member_id}", response_model=List[AttendanceResponse])
async def member_attendance(
    member_id: int,
    db: DbSession,
    current_user: StaffOrTrainer,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[AttendanceResponse]:
    """A member's visits, newest first, optionally within [start, end]."""
    _find_member(db, member_id, None, current_user)
    records = attendance_service.get_member_attendance(db, member_id, start=start, end=end)
    return [AttendanceResponse.model_validate(r) for r in records]
