"""User model for authentication and authorization."""

from sqlalchemy import Column, String, Boolean, Enum, Index, Integer, ForeignKey
from sqlalchemy.orm import relationship, validates
from gym_backend.models.base import BaseModel
from gym_backend.models.enums import UserRole

STAFF_ROLES = (UserRole.ADMIN, UserRole.MANAGER, UserRole.RECEPTIONIST)


class User(BaseModel):
    """
    User model for system authentication and role-based access control.

    Attributes:
        username: Unique username for login
        email: Unique email address
        role: User role determining permissions
        gym_id: Owning gym, NULL only for super users
        active: Whether user account is active
    """

    __tablename__ = "users"

    # Core fields
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.MEMBER)
    active = Column(Boolean, default=True, nullable=False)

    # Profile
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)

    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)

    # Relationships
    gym = relationship("Gym", back_populates="users")

    __table_args__ = (
        Index("idx_user_username", "username"),
        Index("idx_user_email", "email"),
        Index("idx_user_gym_role", "gym_id", "role"),
    )

    @validates("username")
    def validate_username(self, key, value):
        """Validate username is not empty and properly formatted."""
        if not value or not value.strip():
            raise ValueError("Username cannot be empty")
        value = value.strip().lower()
        if not value.replace("_", "").replace(".", "").isalnum():
            raise ValueError(
                "Username must contain only letters, numbers, dots and underscores"
            )
        return value

    @validates("email")
    def validate_email(self, key, value):
        """Validate email format."""
        if not value or not value.strip():
            raise ValueError("Email cannot be empty")
        value = value.strip().lower()
        if "@" not in value or "." not in value.split("@")[1]:
            raise ValueError("Invalid email format")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_super_user(self):
        """Super users are not bound to a gym."""
        return self.role == UserRole.SUPER_USER

    @property
    def is_staff(self):
        return self.role in STAFF_ROLES

    def set_password(self, password):
        """Set user password using bcrypt."""
        from gym_backend.core.security import get_password_hash

        self.password_hash = get_password_hash(password)

    def check_password(self, password):
        """Check password using bcrypt."""
        if not self.active or not self.password_hash:
            return False
        from gym_backend.core.security import verify_password

        return verify_password(password, self.password_hash)

    def deactivate(self):
        """Deactivate user account."""
        self.active = False

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role.value}', active={self.active})>"
