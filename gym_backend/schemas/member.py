"""Member schemas for request/response validation."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, EmailStr, field_validator

from gym_backend.models.enums import Gender, MemberStatus


class MemberBase(BaseModel):
    """Base schema for member data."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: str = Field(..., min_length=1, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=20)
    emergency_contact_name: Optional[str] = Field(None, max_length=200)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    emergency_contact_relation: Optional[str] = Field(None, max_length=50)
    medical_conditions: Optional[str] = None
    allergies: Optional[str] = None
    fitness_goals: Optional[str] = None
    profile_image: Optional[str] = Field(None, max_length=500)


class MemberCreate(MemberBase):
    """
    Schema for creating a member.

    The member code, status and join date are assigned by the server.
    """

    gym_id: Optional[int] = None
    user_id: Optional[int] = None

    @field_validator("first_name", "last_name", "phone", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class MemberUpdate(BaseModel):
    """Schema for updating a member. The member code cannot be changed."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=20)
    emergency_contact_name: Optional[str] = Field(None, max_length=200)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    emergency_contact_relation: Optional[str] = Field(None, max_length=50)
    medical_conditions: Optional[str] = None
    allergies: Optional[str] = None
    fitness_goals: Optional[str] = None
    profile_image: Optional[str] = Field(None, max_length=500)
    status: Optional[MemberStatus] = None


class MemberResponse(MemberBase):
    """Member response schema with all fields."""

    id: int
    member_code: str
    email: Optional[str] = None
    gym_id: Optional[int] = None
    user_id: Optional[int] = None
    status: MemberStatus
    join_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MemberListResponse(BaseModel):
    """Paginated member list response."""

    items: list[MemberResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class NextMemberCode(BaseModel):
    """Preview of the next member code."""

    member_code: str
