"""User service for authentication and role management."""

from typing import Optional, List, Dict, Any
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from gym_backend.models import User, Gym, UserRole
from gym_backend.core.security import get_password_hash, verify_password
from gym_backend.services.base import BaseService
from gym_backend.utils.logger import logger


class UserService(BaseService[User]):
    """
    Service for managing users, authentication, and authorization.

    Provides functionality for:
    - User creation with bcrypt-hashed passwords
    - Credential checks for login
    - Gym-scoped user listing and search
    """

    def __init__(self):
        """Initialize user service."""
        super().__init__(User)

    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username.strip().lower()).first()

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    def create_user(
        self,
        db: Session,
        username: str,
        email: str,
        password: str,
        role: Optional[UserRole] = None,
        gym_id: Optional[int] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> User:
        """
        Create a new user with hashed password.

        Args:
            db: Database session
            username: Unique username
            email: Unique email address
            password: Plain text password
            role: User role (defaults to MEMBER)
            gym_id: Owning gym; required for every role except SUPER_USER

        Returns:
            Created user

        Raises:
            ValueError: If username/email already exist or the gym is invalid
        """
        role = role or UserRole.MEMBER

        if self.get_by_username(db, username):
            raise ValueError(f"Username '{username}' already exists")
        if self.get_by_email(db, email):
            raise ValueError(f"Email '{email}' already exists")

        if role == UserRole.SUPER_USER:
            gym_id = None
        elif gym_id is not None:
            if db.query(Gym.id).filter(Gym.id == gym_id).first() is None:
                raise ValueError(f"Gym not found with id: {gym_id}")

        user_data = {
            "username": username,
            "email": email,
            "password_hash": get_password_hash(password),
            "role": role,
            "gym_id": gym_id,
            "first_name": first_name,
            "last_name": last_name,
            "phone": phone,
            "active": True,
        }

        logger.info(f"Creating user: {username}")
        try:
            return self.create(db, user_data)
        except IntegrityError as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise ValueError("Username or email already exists")

    def authenticate(self, db: Session, username: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, otherwise None."""
        user = self.get_by_username(db, username)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def change_password(self, db: Session, user: User, new_password: str) -> User:
        return self.update(db, user, {"password_hash": get_password_hash(new_password)})

    def search_users(
        self,
        db: Session,
        search_term: str,
        gym_id: Optional[int] = None,
        limit: int = 50,
    ) -> List[User]:
        """Search active users by username, name or email."""
        term = f"%{search_term.strip()}%"
        query = db.query(User).filter(
            User.active == True,
            or_(
                User.username.ilike(term),
                User.first_name.ilike(term),
                User.last_name.ilike(term),
                User.email.ilike(term),
            ),
        )
        if gym_id is not None:
            query = query.filter(User.gym_id == gym_id)
        return query.order_by(User.username).limit(limit).all()

    def list_visible_users(self, db: Session, current_user: User) -> List[User]:
        """Super users see every user; everyone else sees their own gym."""
        query = db.query(User).filter(User.active == True)
        if not current_user.is_super_user:
            query = query.filter(User.gym_id == current_user.gym_id)
        return query.order_by(User.username).all()

    def update_user(self, db: Session, user: User, data: Dict[str, Any]) -> User:
        """
        Update user fields; a ``password`` key is hashed.

        Raises:
            ValueError: If the new email belongs to another user
        """
        data = dict(data)
        if "email" in data and data["email"]:
            existing = self.get_by_email(db, data["email"])
            if existing and existing.id != user.id:
                raise ValueError(f"Email '{data['email']}' already exists")
        password = data.pop("password", None)
        if password:
            data["password_hash"] = get_password_hash(password)
        if "is_active" in data:
            data["active"] = data.pop("is_active")
        return self.update(db, user, data)

    def deactivate(self, db: Session, user: User) -> User:
        user.deactivate()
        db.commit()
        db.refresh(user)
        logger.info(f"Deactivated user {user.username}")
        return user
