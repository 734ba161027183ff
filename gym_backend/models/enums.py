"""Enum types for database models."""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""

    SUPER_USER = "super_user"
    ADMIN = "admin"
    MANAGER = "manager"
    RECEPTIONIST = "receptionist"
    TRAINER = "trainer"
    MEMBER = "member"


class Gender(str, enum.Enum):
    """Member gender enumeration."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class MemberStatus(str, enum.Enum):
    """Member status enumeration."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    EXPIRED = "expired"


class MembershipStatus(str, enum.Enum):
    """Member membership status enumeration."""

    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    SUSPENDED = "suspended"


class PaymentMethod(str, enum.Enum):
    """Payment method enumeration."""

    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    ONLINE = "online"
    BANK_TRANSFER = "bank_transfer"


class PaymentStatus(str, enum.Enum):
    """Payment status enumeration."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class CheckInMethod(str, enum.Enum):
    """Attendance check-in method enumeration."""

    QR_CODE = "qr_code"
    MANUAL = "manual"
    BIOMETRIC = "biometric"


class PaymentFilter(str, enum.Enum):
    """Payment dashboard filter enumeration."""

    RECENT = "recent"
    TODAY_EXPIRES = "today_expires"
    UPCOMING_7_DAYS = "upcoming_7_days"  # Ending 1-7 days from today
    OVERDUES = "overdues"  # Ended yesterday
