"""Attendance service for member check-in and check-out."""

from datetime import date, datetime, time, timedelta
from typing import Optional, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from gym_backend.models import Attendance, Member, MemberStatus, CheckInMethod
from gym_backend.services.base import BaseService
from gym_backend.utils.logger import logger


class AttendanceService(BaseService[Attendance]):
    """
    Service for attendance records.

    A member has at most one open record (checked in, not yet checked out)
    at a time.
    """

    def __init__(self):
        """Initialize attendance service."""
        super().__init__(Attendance)

    def get_open_record(self, db: Session, member_id: int) -> Optional[Attendance]:
        return (
            db.query(Attendance)
            .filter(Attendance.member_id == member_id, Attendance.check_out.is_(None))
            .order_by(Attendance.check_in.desc())
            .first()
        )

    def check_in(
        self,
        db: Session,
        member: Member,
        method: CheckInMethod = CheckInMethod.MANUAL,
        notes: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> Attendance:
        """
        Open an attendance record for a member.

        Raises:
            ValueError: If the member is not active or is already checked in
        """
        if member.status != MemberStatus.ACTIVE:
            raise ValueError(f"Member {member.member_code} is not active")
        if self.get_open_record(db, member.id):
            raise ValueError(f"Member {member.member_code} is already checked in")

        logger.info(f"Checking in member {member.member_code}")
        return self.create(
            db,
            {
                "member_id": member.id,
                "gym_id": member.gym_id,
                "check_in": at or datetime.now(),
                "method": method,
                "notes": notes,
            },
        )

    def check_out(
        self,
        db: Session,
        member: Member,
        at: Optional[datetime] = None,
    ) -> Attendance:
        """
        Close the member's open attendance record.

        Raises:
            ValueError: If the member is not checked in
        """
        record = self.get_open_record(db, member.id)
        if not record:
            raise ValueError(f"Member {member.member_code} is not checked in")
        record.close(at or datetime.now())
        db.commit()
        db.refresh(record)
        logger.info(
            f"Checked out member {member.member_code} after {record.duration_minutes} minutes"
        )
        return record

    def check_out_record(
        self, db: Session, record: Attendance, at: Optional[datetime] = None
    ) -> Attendance:
        """
        Close a specific attendance record.

        Raises:
            ValueError: If the record is already closed
        """
        record.close(at or datetime.now())
        db.commit()
        db.refresh(record)
        return record

    def get_member_attendance(
        self,
        db: Session,
        member_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Attendance]:
        query = db.query(Attendance).filter(Attendance.member_id == member_id)
        if start is not None:
            query = query.filter(Attendance.check_in >= datetime.combine(start, time.min))
        if end is not None:
            query = query.filter(
                Attendance.check_in < datetime.combine(end + timedelta(days=1), time.min)
            )
        return query.order_by(Attendance.check_in.desc()).all()

    def get_attendance_by_date(
        self, db: Session, day: date, gym_id: Optional[int] = None
    ) -> List[Attendance]:
        start = datetime.combine(day, time.min)
        query = db.query(Attendance).filter(
            Attendance.check_in >= start,
            Attendance.check_in < start + timedelta(days=1),
        )
        if gym_id is not None:
            query = query.filter(Attendance.gym_id == gym_id)
        return query.order_by(Attendance.check_in).all()

    def count_for_date(self, db: Session, day: date, gym_id: Optional[int] = None) -> int:
        start = datetime.combine(day, time.min)
        query = db.query(func.count(Attendance.id)).filter(
            Attendance.check_in >= start,
            Attendance.check_in < start + timedelta(days=1),
        )
        if gym_id is not None:
            query = query.filter(Attendance.gym_id == gym_id)
        return query.scalar() or 0

    def currently_checked_in(self, db: Session, gym_id: Optional[int] = None) -> List[Attendance]:
        query = db.query(Attendance).filter(Attendance.check_out.is_(None))
        if gym_id is not None:
            query = query.filter(Attendance.gym_id == gym_id)
        return query.order_by(Attendance.check_in).all()

    def count_members_for_date(self, db: Session, day: date, gym_id: Optional[int] = None) -> int:
        """Distinct members who checked in on ``day``."""
        start = datetime.combine(day, time.min)
        query = db.query(func.count(func.distinct(Attendance.member_id))).filter(
            Attendance.check_in >= start,
            Attendance.check_in < start + timedelta(days=1),
        )
        if gym_id is not None:
            query = query.filter(Attendance.gym_id == gym_id)
        return query.scalar() or 0
