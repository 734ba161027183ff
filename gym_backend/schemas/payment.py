"""Payment schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List, Literal

from pydantic import BaseModel, Field

from gym_backend.models.enums import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""

    member_id: int
    gym_id: Optional[int] = None
    membership_id: Optional[int] = None
    membership_plan_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = Field(None, max_length=100)
    due_date: Optional[date] = None
    notes: Optional[str] = None


class PaymentResponse(BaseModel):
    """Payment response schema."""

    id: int
    member_id: int
    gym_id: Optional[int] = None
    membership_id: Optional[int] = None
    membership_plan_id: Optional[int] = None
    amount: Decimal
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    status: PaymentStatus
    payment_date: Optional[datetime] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentDashboardItem(BaseModel):
    """A payment or a membership falling due, as shown on the payments dashboard."""

    id: int
    source: Literal["payment", "membership"]
    member_id: int
    member_code: Optional[str] = None
    member_name: Optional[str] = None
    gym_id: Optional[int] = None
    gym_name: Optional[str] = None
    membership_plan_id: Optional[int] = None
    amount: Decimal
    payment_method: Optional[PaymentMethod] = None
    status: PaymentStatus
    payment_date: Optional[datetime] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None


class PaymentDashboardResponse(BaseModel):
    """One page of dashboard items with the unpaged total."""

    payments: List[PaymentDashboardItem]
    total_count: int


class RevenueResponse(BaseModel):
    """Revenue total for a period."""

    gym_id: Optional[int] = None
    period: str
    total: Decimal
