"""Membership plan and member membership schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from gym_backend.models.enums import MembershipStatus


class MembershipPlanBase(BaseModel):
    """Base schema for membership plan data."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    duration_months: int = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)
    features: Optional[str] = None


class MembershipPlanCreate(MembershipPlanBase):
    """Schema for creating a membership plan."""

    gym_id: Optional[int] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class MembershipPlanUpdate(BaseModel):
    """Schema for updating a membership plan. All fields are optional."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    duration_months: Optional[int] = Field(None, gt=0)
    price: Optional[Decimal] = Field(None, gt=0)
    features: Optional[str] = None
    is_active: Optional[bool] = None


class MembershipPlanResponse(MembershipPlanBase):
    """Membership plan response schema."""

    id: int
    gym_id: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MemberMembershipCreate(BaseModel):
    """
    Schema for creating a member membership.

    end_date defaults to start_date plus the plan duration, amount_paid to the
    plan price and gym_id to the member's gym.
    """

    member_id: int
    plan_id: int
    gym_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    amount_paid: Optional[Decimal] = Field(None, gt=0)
    status: Optional[MembershipStatus] = None
    auto_renewal: bool = False

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class MemberMembershipUpdate(BaseModel):
    """Schema for updating a member membership."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    amount_paid: Optional[Decimal] = Field(None, gt=0)
    status: Optional[MembershipStatus] = None
    auto_renewal: Optional[bool] = None


class MemberMembershipResponse(BaseModel):
    """Member membership response schema."""

    id: int
    member_id: int
    plan_id: int
    gym_id: Optional[int] = None
    start_date: date
    end_date: date
    amount_paid: Decimal
    status: MembershipStatus
    auto_renewal: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
