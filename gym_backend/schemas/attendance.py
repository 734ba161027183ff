"""Attendance schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from gym_backend.models.enums import CheckInMethod


class CheckInRequest(BaseModel):
    """Check-in request; the member is identified by id or member code."""

    member_id: Optional[int] = None
    member_code: Optional[str] = None
    method: CheckInMethod = CheckInMethod.MANUAL
    notes: Optional[str] = None


class CheckOutRequest(BaseModel):
    """Check-out request; the member is identified by id or member code."""

    member_id: Optional[int] = None
    member_code: Optional[str] = None


class AttendanceResponse(BaseModel):
    """Attendance record response."""

    id: int
    member_id: int
    gym_id: Optional[int] = None
    check_in: datetime
    check_out: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    method: CheckInMethod
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class AttendanceCounts(BaseModel):
    """Attendance figures for one day."""

    date: date
    gym_id: Optional[int] = None
    check_ins: int
    members: int
