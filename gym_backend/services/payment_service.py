"""Payment service: recording payments, revenue figures and the payments dashboard."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional, List, Dict, Any
from sqlalchemy import func
from sqlalchemy.orm import Session
from gym_backend.models import (
    Member,
    MembershipPlan,
    MemberMembership,
    Payment,
    PaymentStatus,
    PaymentFilter,
)
from gym_backend.services.base import BaseService
from gym_backend.services.membership_service import MemberMembershipService
from gym_backend.utils.logger import logger


class PaymentService(BaseService[Payment]):
    """
    Service for payments.

    Every query takes an optional ``gym_id``; None means all gyms.
    """

    def __init__(self):
        """Initialize payment service."""
        super().__init__(Payment)
        self.membership_service = MemberMembershipService()

    def record_payment(self, db: Session, data: Dict[str, Any]) -> Payment:
        """
        Record a completed payment.

        The gym defaults to the member's gym.

        Raises:
            ValueError: If the member, plan or membership does not exist
        """
        member = db.query(Member).filter(Member.id == data["member_id"]).first()
        if not member:
            raise ValueError(f"Member not found with ID: {data['member_id']}")

        plan_id = data.get("membership_plan_id")
        if plan_id is not None and not db.query(MembershipPlan.id).filter(MembershipPlan.id == plan_id).first():
            raise ValueError(f"Membership Plan not found with ID: {plan_id}")

        membership_id = data.get("membership_id")
        if membership_id is not None:
            membership = (
                db.query(MemberMembership).filter(MemberMembership.id == membership_id).first()
            )
            if not membership or membership.member_id != member.id:
                raise ValueError(f"Membership not found with ID: {membership_id}")

        gym_id = data.get("gym_id") if data.get("gym_id") is not None else member.gym_id

        logger.info(f"Recording payment for member ID: {member.id}")
        return self.create(
            db,
            {
                "member_id": member.id,
                "gym_id": gym_id,
                "membership_id": membership_id,
                "membership_plan_id": plan_id,
                "amount": data["amount"],
                "payment_method": data["payment_method"],
                "transaction_id": data.get("transaction_id"),
                "status": PaymentStatus.COMPLETED,
                "payment_date": datetime.now(),
                "due_date": data.get("due_date"),
                "notes": data.get("notes"),
            },
        )

    def _scoped(self, db: Session, gym_id: Optional[int]):
        query = db.query(Payment)
        if gym_id is not None:
            query = query.filter(Payment.gym_id == gym_id)
        return query

    def list_payments(self, db: Session, gym_id: Optional[int] = None) -> List[Payment]:
        return self._scoped(db, gym_id).order_by(Payment.id.desc()).all()

    def get_member_payments(self, db: Session, member_id: int) -> List[Payment]:
        return (
            db.query(Payment)
            .filter(Payment.member_id == member_id)
            .order_by(Payment.id.desc())
            .all()
        )

    def get_overdue_payments(
        self, db: Session, gym_id: Optional[int] = None, today: Optional[date] = None
    ) -> List[Payment]:
        """Pending payments whose due date has passed."""
        today = today or date.today()
        return (
            self._scoped(db, gym_id)
            .filter(Payment.status == PaymentStatus.PENDING, Payment.due_date < today)
            .order_by(Payment.due_date)
            .all()
        )

    def _completed_total(
        self, db: Session, start: datetime, end: datetime, gym_id: Optional[int]
    ) -> Decimal:
        query = db.query(func.sum(Payment.amount)).filter(
            Payment.status == PaymentStatus.COMPLETED,
            Payment.payment_date >= start,
            Payment.payment_date < end,
        )
        if gym_id is not None:
            query = query.filter(Payment.gym_id == gym_id)
        return Decimal(query.scalar() or 0)

    def get_total_revenue_by_date(
        self, db: Session, day: date, gym_id: Optional[int] = None
    ) -> Decimal:
        start = datetime.combine(day, time.min)
        return self._completed_total(db, start, start + timedelta(days=1), gym_id)

    def get_current_month_total(
        self, db: Session, gym_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> Decimal:
        now = now or datetime.now()
        start = datetime.combine(now.date().replace(day=1), time.min)
        return self._completed_total(db, start, now + timedelta(microseconds=1), gym_id)

    def get_total_pending_amount(self, db: Session, gym_id: Optional[int] = None) -> Decimal:
        query = db.query(func.sum(Payment.amount)).filter(Payment.status == PaymentStatus.PENDING)
        if gym_id is not None:
            query = query.filter(Payment.gym_id == gym_id)
        return Decimal(query.scalar() or 0)

    def find_payments_by_filter(
        self,
        db: Session,
        payment_filter: PaymentFilter,
        gym_id: Optional[int] = None,
        page: int = 0,
        size: int = 20,
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Payments dashboard.

        RECENT lists payments newest first. The other filters list memberships
        as pending dues: TODAY_EXPIRES (ending today), UPCOMING_7_DAYS (ending
        in 1-7 days) and OVERDUES (ended yesterday).

        Args:
            page: Zero-based page index
            size: Page size

        Returns:
            {"payments": [dashboard items], "total_count": int}
        """
        if page < 0 or size < 1:
            raise ValueError("page must be >= 0 and size >= 1")
        today = today or date.today()
        logger.info(f"Fetching payments with filter: {payment_filter.value} for gym_id: {gym_id}")

        if payment_filter == PaymentFilter.TODAY_EXPIRES:
            items = [
                self._membership_item(m, today, "Membership expires today")
                for m in self.membership_service.ending_between(db, today, today, gym_id)
            ]
        elif payment_filter == PaymentFilter.UPCOMING_7_DAYS:
            items = [
                self._membership_item(
                    m, today, f"Membership expiring in {(m.end_date - today).days} days"
                )
                for m in self.membership_service.ending_between(
                    db, today + timedelta(days=1), today + timedelta(days=7), gym_id
                )
            ]
        elif payment_filter == PaymentFilter.OVERDUES:
            yesterday = today - timedelta(days=1)
            items = [
                self._membership_item(m, today, "Membership overdue - expired yesterday")
                for m in self.membership_service.ending_between(db, yesterday, yesterday, gym_id)
            ]
        else:
            query = self._recent_payments(db, gym_id)
            return {
                "payments": [
                    self._payment_item(p) for p in query.offset(page * size).limit(size).all()
                ],
                "total_count": query.order_by(None).count(),
            }

        start = page * size
        return {"payments": items[start:start + size], "total_count": len(items)}

    def _recent_payments(self, db: Session, gym_id: Optional[int]):
        # Most recent first, payments without a date last
        return self._scoped(db, gym_id).order_by(
            Payment.payment_date.is_(None),
            Payment.payment_date.desc(),
            Payment.id.desc(),
        )

    @staticmethod
    def _payment_item(payment: Payment) -> Dict[str, Any]:
        member = payment.member
        return {
            "id": payment.id,
            "source": "payment",
            "member_id": payment.member_id,
            "member_code": member.member_code if member else None,
            "member_name": member.full_name if member else None,
            "gym_id": payment.gym_id,
            "gym_name": payment.gym.name if payment.gym else None,
            "membership_plan_id": payment.membership_plan_id,
            "amount": payment.amount,
            "payment_method": payment.payment_method,
            "status": payment.status,
            "payment_date": payment.payment_date,
            "due_date": payment.due_date,
            "notes": payment.notes,
        }

    @staticmethod
    def _membership_item(membership: MemberMembership, today: date, note: str) -> Dict[str, Any]:
        member = membership.member
        plan_name = membership.plan.name if membership.plan else ""
        return {
            "id": membership.id,
            "source": "membership",
            "member_id": membership.member_id,
            "member_code": member.member_code if member else None,
            "member_name": member.full_name if member else None,
            "gym_id": membership.gym_id,
            "gym_name": membership.gym.name if membership.gym else None,
            "membership_plan_id": membership.plan_id,
            "amount": membership.amount_paid,
            "payment_method": None,
            "status": PaymentStatus.PENDING,
            "payment_date": None,
            "due_date": membership.end_date,
            "notes": f"{note} - {plan_name}",
        }
