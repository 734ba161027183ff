"""Gym service for managing tenants and their dashboard statistics."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional, List, Dict, Any
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from gym_backend.models import (
    Gym,
    User,
    Member,
    Trainer,
    Attendance,
    Payment,
    UserRole,
    MemberStatus,
    PaymentStatus,
)
from gym_backend.models.user import STAFF_ROLES
from gym_backend.services.base import BaseService
from gym_backend.utils.logger import logger


class GymService(BaseService[Gym]):
    """
    Service for managing gyms.

    Provides functionality for:
    - Creating gyms with unique gym codes
    - Listing active gyms
    - Per-gym dashboard statistics
    """

    def __init__(self):
        """Initialize gym service."""
        super().__init__(Gym)

    def get_by_code(self, db: Session, gym_code: str) -> Optional[Gym]:
        return db.query(Gym).filter(Gym.gym_code == gym_code.strip()).first()

    def list_active(self, db: Session) -> List[Gym]:
        return db.query(Gym).filter(Gym.is_active == True).order_by(Gym.name).all()

    def create_gym(self, db: Session, data: Dict[str, Any]) -> Gym:
        """
        Create a new gym.

        Raises:
            ValueError: If the gym code is already in use
        """
        if self.get_by_code(db, data["gym_code"]):
            raise ValueError(f"Gym code '{data['gym_code']}' already exists")

        logger.info(f"Creating new gym: {data.get('name')}")
        try:
            return self.create(db, {**data, "is_active": True})
        except IntegrityError:
            db.rollback()
            raise ValueError(f"Gym code '{data['gym_code']}' already exists")

    def update_gym(self, db: Session, gym: Gym, data: Dict[str, Any]) -> Gym:
        """
        Update a gym.

        Raises:
            ValueError: If the new gym code belongs to another gym
        """
        new_code = data.get("gym_code")
        if new_code and new_code != gym.gym_code:
            existing = self.get_by_code(db, new_code)
            if existing and existing.id != gym.id:
                raise ValueError(f"Gym code '{new_code}' already exists")
        return self.update(db, gym, data)

    def get_stats(self, db: Session, gym_id: int, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Dashboard statistics for one gym.

        Args:
            db: Database session
            gym_id: Gym ID
            today: Day to report on (defaults to today)

        Returns:
            Dictionary of member, staff, attendance and revenue figures
        """
        today = today or date.today()
        day_start = datetime.combine(today, time.min)
        day_end = day_start + timedelta(days=1)
        month_start = datetime.combine(today.replace(day=1), time.min)

        member_counts = dict(
            db.query(Member.status, func.count(Member.id))
            .filter(Member.gym_id == gym_id)
            .group_by(Member.status)
            .all()
        )

        staff_count = (
            db.query(func.count(User.id))
            .filter(User.gym_id == gym_id, User.role.in_(STAFF_ROLES))
            .scalar()
        )
        trainer_count = (
            db.query(func.count(Trainer.id))
            .filter(Trainer.gym_id == gym_id, Trainer.is_active == True)
            .scalar()
        )
        member_user_count = (
            db.query(func.count(User.id))
            .filter(User.gym_id == gym_id, User.role == UserRole.MEMBER)
            .scalar()
        )

        todays_attendance = (
            db.query(func.count(Attendance.id))
            .filter(
                Attendance.gym_id == gym_id,
                Attendance.check_in >= day_start,
                Attendance.check_in < day_end,
            )
            .scalar()
        )

        def _revenue(start: datetime, end: datetime) -> Decimal:
            total = (
                db.query(func.sum(Payment.amount))
                .filter(
                    Payment.gym_id == gym_id,
                    Payment.status == PaymentStatus.COMPLETED,
                    Payment.payment_date >= start,
                    Payment.payment_date < end,
                )
                .scalar()
            )
            return Decimal(total or 0)

        pending = (
            db.query(func.sum(Payment.amount))
            .filter(Payment.gym_id == gym_id, Payment.status == PaymentStatus.PENDING)
            .scalar()
        )

        return {
            "gym_id": gym_id,
            "total_members": sum(member_counts.values()),
            "active_members": member_counts.get(MemberStatus.ACTIVE, 0),
            "expired_members": member_counts.get(MemberStatus.EXPIRED, 0),
            "member_users": member_user_count or 0,
            "trainers": trainer_count or 0,
            "staff": staff_count or 0,
            "todays_attendance": todays_attendance or 0,
            "todays_revenue": _revenue(day_start, day_end),
            "month_revenue": _revenue(month_start, day_end),
            "pending_amount": Decimal(pending or 0),
        }
