"""Payment endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from gym_backend.dependencies import (
    DbSession,
    StaffUser,
    ManagerUser,
    resolve_gym_scope,
    ensure_gym_access,
)
from gym_backend.models import Member, PaymentFilter
from gym_backend.schemas.payment import (
    PaymentCreate,
    PaymentResponse,
    PaymentDashboardResponse,
    RevenueResponse,
)
from gym_backend.services.payment_service import PaymentService

router = APIRouter()
payment_service = PaymentService()


@router.get("", response_model=List[PaymentResponse])
async def list_payments(
    db: DbSession,
    current_user: StaffUser,
    gym_id: Optional[int] = None,
) -> List[PaymentResponse]:
    """List payments, newest first."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    return [PaymentResponse.model_validate(p) for p in payment_service.list_payments(db, gym_id)]


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_in: PaymentCreate,
    db: DbSession,
    current_user: StaffUser,
) -> PaymentResponse:
    """Record a completed payment for a member."""
    member = db.query(Member).filter(Member.id == payment_in.member_id).first()
    if member is not None:
        ensure_gym_access(current_user, member.gym_id)
    if payment_in.gym_id is not None:
        resolve_gym_scope(current_user, payment_in.gym_id)
    try:
        payment = payment_service.record_payment(db, payment_in.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return PaymentResponse.model_validate(payment)


@router.get("/dashboard", response_model=PaymentDashboardResponse)
async def payments_dashboard(
    db: DbSession,
    current_user: StaffUser,
    filter: PaymentFilter = PaymentFilter.RECENT,
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=500),
    gym_id: Optional[int] = None,
) -> PaymentDashboardResponse:
    """Recent payments or memberships falling due, zero-based paging."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    result = payment_service.find_payments_by_filter(
        db, filter, gym_id=gym_id, page=page, size=size
    )
    return PaymentDashboardResponse(**result)


@router.get("/overdue", response_model=List[PaymentResponse])
async def list_overdue_payments(
    db: DbSession,
    current_user: StaffUser,
    gym_id: Optional[int] = None,
) -> List[PaymentResponse]:
    """Pending payments past their due date."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    return [
        PaymentResponse.model_validate(p)
        for p in payment_service.get_overdue_payments(db, gym_id=gym_id)
    ]


@router.get("/member/{member_id}", response_model=List[PaymentResponse])
async def list_member_payments(
    member_id: int,
    db: DbSession,
    current_user: StaffUser,
) -> List[PaymentResponse]:
    """All payments for one member."""
    member = db.query(Member).filter(Member.id == member_id).first()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found",
        )
    ensure_gym_access(current_user, member.gym_id)
    return [
        PaymentResponse.model_validate(p)
        for p in payment_service.get_member_payments(db, member_id)
    ]


@router.get("/revenue/date", response_model=RevenueResponse)
async def revenue_for_date(
    db: DbSession,
    current_user: ManagerUser,
    day: Optional[date] = Query(None, alias="date"),
    gym_id: Optional[int] = None,
) -> RevenueResponse:
    """Completed payment total for a day (default today)."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    day = day or date.today()
    return RevenueResponse(
        gym_id=gym_id,
        period=day.isoformat(),
        total=payment_service.get_total_revenue_by_date(db, day, gym_id=gym_id),
    )


@router.get("/revenue/month", response_model=RevenueResponse)
async def revenue_current_month(
    db: DbSession,
    current_user: ManagerUser,
    gym_id: Optional[int] = None,
) -> RevenueResponse:
    """Completed payment total for the current month."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    return RevenueResponse(
        gym_id=gym_id,
        period=date.today().strftime("%Y-%m"),
        total=payment_service.get_current_month_total(db, gym_id=gym_id),
    )


@router.get("/revenue/pending", response_model=RevenueResponse)
async def pending_amount(
    db: DbSession,
    current_user: ManagerUser,
    gym_id: Optional[int] = None,
) -> RevenueResponse:
    """Total of pending payments."""
    gym_id = resolve_gym_scope(current_user, gym_id)
    return RevenueResponse(
        gym_id=gym_id,
        period="pending",
        total=payment_service.get_total_pending_amount(db, gym_id=gym_id),
    )


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    db: DbSession,
    current_user: StaffUser,
) -> PaymentResponse:
    """Get a payment by ID."""
    payment = payment_service.get(db, payment_id)
    if not payment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )
    ensure_gym_access(current_user, payment.gym_id)
    return PaymentResponse.model_validate(payment)
