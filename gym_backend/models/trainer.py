"""Trainer model."""

from decimal import Decimal
from sqlalchemy import (
    Column,
    String,
    Boolean,
    Text,
    Index,
    Integer,
    ForeignKey,
    Numeric,
    JSON,
)
from sqlalchemy.orm import relationship, validates
from gym_backend.models.base import BaseModel


class Trainer(BaseModel):
    """
    Trainer profile, optionally linked to a TRAINER user account.

    Attributes:
        user_id: Linked user (unique across trainers)
        email: Unique email address
        rating: Average rating, 0-5
        total_ratings: Number of ratings received
    """

    __tablename__ = "trainers"

    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=True)
    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    phone = Column(String(20), nullable=False)
    specialization = Column(String(200), nullable=True)
    experience_years = Column(Integer, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    certifications = Column(JSON, nullable=True, default=list)
    bio = Column(Text, nullable=True)
    schedule = Column(JSON, nullable=True)
    location = Column(String(200), nullable=True)
    rating = Column(Numeric(3, 2), nullable=False, default=Decimal("0"))
    total_ratings = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    user = relationship("User")
    gym = relationship("Gym")

    __table_args__ = (
        Index("idx_trainer_gym_active", "gym_id", "is_active"),
        Index("idx_trainer_specialization", "specialization"),
    )

    @validates("first_name", "last_name", "phone")
    def validate_required_fields(self, key, value):
        if not value or not value.strip():
            raise ValueError(f"{key} is required")
        return value.strip()

    @validates("email")
    def validate_email(self, key, value):
        if not value or not value.strip():
            raise ValueError("Email is required")
        value = value.strip().lower()
        if "@" not in value or "." not in value.split("@")[1]:
            raise ValueError("Invalid email format")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Trainer(id={self.id}, email='{self.email}', active={self.is_active})>"
