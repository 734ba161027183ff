"""Trainer schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Any

from pydantic import BaseModel, Field, EmailStr


class TrainerBase(BaseModel):
    """Base schema for trainer data."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    specialization: Optional[str] = Field(None, max_length=200)
    experience_years: Optional[int] = Field(None, ge=0)
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    certifications: Optional[List[str]] = None
    bio: Optional[str] = None
    schedule: Optional[Any] = None
    location: Optional[str] = Field(None, max_length=200)


class TrainerCreate(TrainerBase):
    """Schema for creating a trainer."""

    user_id: Optional[int] = None
    gym_id: Optional[int] = None


class TrainerUpdate(BaseModel):
    """Schema for updating a trainer. All fields are optional."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    specialization: Optional[str] = Field(None, max_length=200)
    experience_years: Optional[int] = Field(None, ge=0)
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    certifications: Optional[List[str]] = None
    bio: Optional[str] = None
    schedule: Optional[Any] = None
    location: Optional[str] = Field(None, max_length=200)
    is_active: Optional[bool] = None
    user_id: Optional[int] = None


class TrainerRating(BaseModel):
    """A single 0-5 rating."""

    rating: Decimal = Field(..., ge=0, le=5)


class TrainerResponse(TrainerBase):
    """Trainer response schema."""

    id: int
    email: str
    user_id: Optional[int] = None
    gym_id: Optional[int] = None
    rating: Decimal
    total_ratings: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
