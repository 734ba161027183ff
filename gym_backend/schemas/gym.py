"""Gym schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, EmailStr, field_validator


class GymBase(BaseModel):
    """Base schema for gym data."""

    gym_code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=20)


class GymCreate(GymBase):
    """Schema for creating a gym."""

    @field_validator("gym_code", "name", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class GymUpdate(BaseModel):
    """Schema for updating a gym. All fields are optional."""

    gym_code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None


class GymResponse(GymBase):
    """Gym response schema."""

    id: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class GymStats(BaseModel):
    """Per-gym dashboard statistics."""

    gym_id: int
    total_members: int
    active_members: int
    expired_members: int
    member_users: int
    trainers: int
    staff: int
    todays_attendance: int
    todays_revenue: Decimal
    month_revenue: Decimal
    pending_amount: Decimal
