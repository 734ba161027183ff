"""Member model."""

from sqlalchemy import (
    Column,
    String,
    Date,
    Enum,
    Text,
    Index,
    Integer,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship, validates
from gym_backend.models.base import BaseModel
from gym_backend.models.enums import Gender, MemberStatus


class Member(BaseModel):
    """
    Gym member.

    Attributes:
        member_code: Generated code, M<YYYYMMDD><NNNN>, immutable after creation
        gym_id: Owning gym
        user_id: Linked login account, if any
        status: Membership standing of the member
        join_date: Local calendar day the member was created
    """

    __tablename__ = "members"

    member_code = Column(String(20), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(Enum(Gender), nullable=True)

    # Address
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    pincode = Column(String(20), nullable=True)

    # Emergency contact
    emergency_contact_name = Column(String(200), nullable=True)
    emergency_contact_phone = Column(String(20), nullable=True)
    emergency_contact_relation = Column(String(50), nullable=True)

    # Health
    medical_conditions = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    fitness_goals = Column(Text, nullable=True)
    profile_image = Column(String(500), nullable=True)

    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(Enum(MemberStatus), nullable=False, default=MemberStatus.ACTIVE)
    join_date = Column(Date, nullable=True)

    # Relationships
    gym = relationship("Gym", back_populates="members")
    user = relationship("User")
    memberships = relationship(
        "MemberMembership", back_populates="member", cascade="all, delete-orphan"
    )
    attendances = relationship(
        "Attendance", back_populates="member", cascade="all, delete-orphan"
    )
    payments = relationship(
        "Payment", back_populates="member", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("member_code", name="uq_member_code"),
        Index("idx_member_gym_status", "gym_id", "status"),
        Index("idx_member_email", "email"),
        Index("idx_member_phone", "phone"),
    )

    @validates("member_code")
    def validate_member_code(self, key, value):
        """Member codes are assigned once and never changed."""
        if not value or not value.strip():
            raise ValueError("Member code cannot be empty")
        if self.member_code is not None and self.member_code != value:
            raise ValueError("Member code cannot be changed")
        return value

    @validates("first_name", "last_name", "phone")
    def validate_required_fields(self, key, value):
        """Validate required string fields are not empty."""
        if not value or not value.strip():
            raise ValueError(f"{key} cannot be empty")
        return value.strip()

    @validates("email")
    def validate_email(self, key, value):
        if value is None or not value.strip():
            return None
        value = value.strip().lower()
        if "@" not in value or "." not in value.split("@")[1]:
            raise ValueError("Invalid email format")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Member(id={self.id}, code='{self.member_code}', status='{self.status.value if self.status else None}')>"
