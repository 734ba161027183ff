"""Gym model, the tenant boundary for all gym-scoped records."""

from sqlalchemy import Column, String, Boolean, Text, Index
from sqlalchemy.orm import relationship, validates
from gym_backend.models.base import BaseModel


class Gym(BaseModel):
    """
    Gym (tenant) model.

    Attributes:
        gym_code: Unique short code for the gym
        name: Display name
        is_active: Whether the gym is active
    """

    __tablename__ = "gyms"

    gym_code = Column(String(50), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    pincode = Column(String(20), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    users = relationship("User", back_populates="gym")
    members = relationship("Member", back_populates="gym")

    __table_args__ = (
        Index("idx_gym_code", "gym_code"),
        Index("idx_gym_active", "is_active"),
    )

    @validates("gym_code", "name")
    def validate_required_fields(self, key, value):
        """Validate required string fields are not empty."""
        if not value or not value.strip():
            raise ValueError(f"{key} cannot be empty")
        return value.strip()

    def __repr__(self):
        return f"<Gym(id={self.id}, code='{self.gym_code}', name='{self.name}')>"
