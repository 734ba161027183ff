"""Services for the gym backend."""

from .base import BaseService
from .gym_service import GymService
from .user_service import UserService
from .member_service import MemberService
from .trainer_service import TrainerService
from .membership_service import MembershipPlanService, MemberMembershipService
from .payment_service import PaymentService
from .attendance_service import AttendanceService
from .member_code_generator import (
    MemberCodeGenerator,
    SqlMemberCodeStore,
    MemberCodeError,
    CodeGenerationExhausted,
    SequenceExhausted,
    StaleDayKey,
)

__all__ = [
    "BaseService",
    "GymService",
    "UserService",
    "MemberService",
    "TrainerService",
    "MembershipPlanService",
    "MemberMembershipService",
    "PaymentService",
    "AttendanceService",
    "MemberCodeGenerator",
    "SqlMemberCodeStore",
    "MemberCodeError",
    "CodeGenerationExhausted",
    "SequenceExhausted",
    "StaleDayKey",
]
