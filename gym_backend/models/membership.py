"""Membership plan and member membership models."""

from sqlalchemy import (
    Column,
    String,
    Date,
    Boolean,
    Enum,
    Text,
    Index,
    Integer,
    ForeignKey,
    CheckConstraint,
    Numeric,
)
from sqlalchemy.orm import relationship, validates
from gym_backend.models.base import BaseModel
from gym_backend.models.enums import MembershipStatus


class MembershipPlan(BaseModel):
    """
    Purchasable membership plan offered by a gym.

    Attributes:
        duration_months: Length of the plan, must be positive
        price: Plan price, must be positive
    """

    __tablename__ = "membership_plans"

    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    duration_months = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    features = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    gym = relationship("Gym")
    memberships = relationship(
        "MemberMembership", back_populates="plan", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_plan_gym_active", "gym_id", "is_active"),
        CheckConstraint("duration_months > 0", name="check_plan_duration_positive"),
        CheckConstraint("price > 0", name="check_plan_price_positive"),
    )

    @validates("name")
    def validate_name(self, key, value):
        if not value or not value.strip():
            raise ValueError("Plan name cannot be empty")
        return value.strip()

    @validates("duration_months")
    def validate_duration(self, key, value):
        if value is None or value <= 0:
            raise ValueError("Duration must be a positive number of months")
        return value

    @validates("price")
    def validate_price(self, key, value):
        if value is None or value <= 0:
            raise ValueError("Price must be positive")
        return value

    def __repr__(self):
        return f"<MembershipPlan(id={self.id}, name='{self.name}', months={self.duration_months})>"


class MemberMembership(BaseModel):
    """
    A member's subscription to a plan for a date range.

    Attributes:
        start_date: First day covered
        end_date: Last day covered, not before start_date
        amount_paid: Amount paid for the membership
        status: Current membership status
    """

    __tablename__ = "member_memberships"

    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    plan_id = Column(Integer, ForeignKey("membership_plans.id"), nullable=False)
    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    amount_paid = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(MembershipStatus), nullable=False, default=MembershipStatus.ACTIVE)
    auto_renewal = Column(Boolean, default=False, nullable=False)

    # Relationships
    member = relationship("Member", back_populates="memberships")
    plan = relationship("MembershipPlan", back_populates="memberships")
    gym = relationship("Gym")

    __table_args__ = (
        Index("idx_membership_member_gym_status", "member_id", "gym_id", "status"),
        Index("idx_membership_end_date", "end_date"),
        CheckConstraint("end_date >= start_date", name="check_membership_dates_valid"),
        CheckConstraint("amount_paid > 0", name="check_membership_amount_positive"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == MembershipStatus.ACTIVE

    def __repr__(self):
        return (
            f"<MemberMembership(id={self.id}, member_id={self.member_id}, "
            f"plan_id={self.plan_id}, status='{self.status.value if self.status else None}')>"
        )
