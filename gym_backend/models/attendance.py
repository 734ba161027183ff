"""Attendance model (check-in / check-out records)."""

from datetime import datetime
from sqlalchemy import Column, DateTime, Enum, Text, Index, Integer, ForeignKey
from sqlalchemy.orm import relationship
from gym_backend.models.base import BaseModel
from gym_backend.models.enums import CheckInMethod


class Attendance(BaseModel):
    """
    A single gym visit.

    A record is open while check_out is NULL and closed once check_out is set.
    """

    __tablename__ = "attendance"

    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)
    check_in = Column(DateTime, nullable=False)
    check_out = Column(DateTime, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    method = Column(Enum(CheckInMethod), nullable=False, default=CheckInMethod.MANUAL)
    notes = Column(Text, nullable=True)

    # Relationships
    member = relationship("Member", back_populates="attendances")
    gym = relationship("Gym")

    __table_args__ = (
        Index("idx_attendance_member_check_in", "member_id", "check_in"),
        Index("idx_attendance_gym_check_in", "gym_id", "check_in"),
    )

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def close(self, check_out: datetime) -> None:
        """Record the check-out time and visit duration."""
        if not self.is_open:
            raise ValueError("Member has already checked out")
        if check_out < self.check_in:
            raise ValueError("Check-out cannot be before check-in")
        self.check_out = check_out
        self.duration_minutes = int((check_out - self.check_in).total_seconds() // 60)

    def __repr__(self):
        return f"<Attendance(id={self.id}, member_id={self.member_id}, open={self.is_open})>"
