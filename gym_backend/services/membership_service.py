"""Membership plan and member membership services."""

import calendar
from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session
from gym_backend.models import (
    Member,
    MembershipPlan,
    MemberMembership,
    MembershipStatus,
)
from gym_backend.services.base import BaseService
from gym_backend.utils.logger import logger


def add_months(start: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class MembershipPlanService(BaseService[MembershipPlan]):
    """Service for membership plans."""

    def __init__(self):
        """Initialize membership plan service."""
        super().__init__(MembershipPlan)

    def list_plans(
        self,
        db: Session,
        gym_id: Optional[int] = None,
        active_only: bool = True,
    ) -> List[MembershipPlan]:
        query = db.query(MembershipPlan)
        if gym_id is not None:
            query = query.filter(MembershipPlan.gym_id == gym_id)
        if active_only:
            query = query.filter(MembershipPlan.is_active == True)
        return query.order_by(MembershipPlan.price).all()

    def get_by_price_range(
        self,
        db: Session,
        min_price: Decimal,
        max_price: Decimal,
        gym_id: Optional[int] = None,
    ) -> List[MembershipPlan]:
        if min_price > max_price:
            raise ValueError("min_price cannot be greater than max_price")
        query = db.query(MembershipPlan).filter(
            MembershipPlan.is_active == True,
            MembershipPlan.price >= min_price,
            MembershipPlan.price <= max_price,
        )
        if gym_id is not None:
            query = query.filter(MembershipPlan.gym_id == gym_id)
        return query.order_by(MembershipPlan.price).all()


class MemberMembershipService(BaseService[MemberMembership]):
    """
    Service for member memberships.

    A member holds at most one ACTIVE membership per gym, and a membership's
    gym must be the member's gym.
    """

    def __init__(self):
        """Initialize member membership service."""
        super().__init__(MemberMembership)

    def _has_other_active(
        self,
        db: Session,
        member_id: int,
        gym_id: Optional[int],
        exclude_id: Optional[int] = None,
    ) -> bool:
        query = db.query(MemberMembership.id).filter(
            MemberMembership.member_id == member_id,
            MemberMembership.gym_id == gym_id,
            MemberMembership.status == MembershipStatus.ACTIVE,
        )
        if exclude_id is not None:
            query = query.filter(MemberMembership.id != exclude_id)
        return query.first() is not None

    def create_membership(self, db: Session, data: Dict[str, Any]) -> MemberMembership:
        """
        Create a membership for a member.

        ``end_date`` defaults to ``start_date`` plus the plan's duration and
        ``amount_paid`` to the plan price.

        Raises:
            ValueError: If the member/plan is missing or a rule is violated
        """
        member = db.query(Member).filter(Member.id == data["member_id"]).first()
        if not member:
            raise ValueError(f"Member not found with ID: {data['member_id']}")
        plan = db.query(MembershipPlan).filter(MembershipPlan.id == data["plan_id"]).first()
        if not plan:
            raise ValueError(f"Membership plan not found with ID: {data['plan_id']}")

        gym_id = data.get("gym_id")
        if gym_id is None:
            gym_id = member.gym_id
        if member.gym_id is not None and gym_id != member.gym_id:
            raise ValueError(
                f"Member belongs to gym {member.gym_id} but membership is being created for gym {gym_id}"
            )

        status = data.get("status") or MembershipStatus.ACTIVE
        if status == MembershipStatus.ACTIVE and self._has_other_active(db, member.id, gym_id):
            raise ValueError(
                "Member already has an active membership in this gym. "
                "Please cancel or wait for the current membership to expire before creating a new one."
            )

        start_date = data.get("start_date") or date.today()
        end_date = data.get("end_date") or add_months(start_date, plan.duration_months)
        if end_date < start_date:
            raise ValueError("End date cannot be before start date")
        amount_paid = data.get("amount_paid") or plan.price
        if amount_paid <= 0:
            raise ValueError("Amount paid must be positive")

        logger.info(f"Creating new membership for member ID: {member.id}")
        return self.create(
            db,
            {
                "member_id": member.id,
                "plan_id": plan.id,
                "gym_id": gym_id,
                "start_date": start_date,
                "end_date": end_date,
                "amount_paid": amount_paid,
                "status": status,
                "auto_renewal": bool(data.get("auto_renewal", False)),
            },
        )

    def update_membership(
        self,
        db: Session,
        membership: MemberMembership,
        data: Dict[str, Any],
    ) -> MemberMembership:
        """
        Update dates, amount, renewal flag or status.

        Raises:
            ValueError: If re-activating would give the member two active memberships
        """
        data = {k: v for k, v in data.items() if v is not None}
        if data.get("status") == MembershipStatus.ACTIVE and self._has_other_active(
            db, membership.member_id, membership.gym_id, exclude_id=membership.id
        ):
            raise ValueError(
                "Cannot activate this membership. Member already has an active membership in this gym."
            )
        start = data.get("start_date", membership.start_date)
        end = data.get("end_date", membership.end_date)
        if end < start:
            raise ValueError("End date cannot be before start date")
        logger.info(f"Updating membership with ID: {membership.id}")
        return self.update(db, membership, data)

    def list_memberships(
        self,
        db: Session,
        gym_id: Optional[int] = None,
        member_id: Optional[int] = None,
    ) -> List[MemberMembership]:
        query = db.query(MemberMembership)
        if gym_id is not None:
            query = query.filter(MemberMembership.gym_id == gym_id)
        if member_id is not None:
            query = query.filter(MemberMembership.member_id == member_id)
        return query.order_by(MemberMembership.start_date.desc()).all()

    def ending_between(
        self,
        db: Session,
        start: date,
        end: date,
        gym_id: Optional[int] = None,
    ) -> List[MemberMembership]:
        """Memberships whose end_date falls within [start, end]."""
        query = db.query(MemberMembership).filter(
            MemberMembership.end_date >= start,
            MemberMembership.end_date <= end,
        )
        if gym_id is not None:
            query = query.filter(MemberMembership.gym_id == gym_id)
        return query.order_by(MemberMembership.end_date, MemberMembership.id).all()
