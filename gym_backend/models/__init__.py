"""Database models for the gym backend."""

# Import all models
from gym_backend.models.base import BaseModel
from gym_backend.models.enums import (
    UserRole,
    Gender,
    MemberStatus,
    MembershipStatus,
    PaymentMethod,
    PaymentStatus,
    CheckInMethod,
    PaymentFilter,
)
from gym_backend.models.gym import Gym
from gym_backend.models.user import User
from gym_backend.models.member import Member
from gym_backend.models.trainer import Trainer
from gym_backend.models.membership import MembershipPlan, MemberMembership
from gym_backend.models.payment import Payment
from gym_backend.models.attendance import Attendance

# Export all models and enums
__all__ = [
    # Base
    "BaseModel",
    # Enums
    "UserRole",
    "Gender",
    "MemberStatus",
    "MembershipStatus",
    "PaymentMethod",
    "PaymentStatus",
    "CheckInMethod",
    "PaymentFilter",
    # Models
    "Gym",
    "User",
    "Member",
    "Trainer",
    "MembershipPlan",
    "MemberMembership",
    "Payment",
    "Attendance",
]
