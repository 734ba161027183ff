"""Database seeding for first-time startup."""

from sqlalchemy import text
from sqlalchemy.orm import Session

from gym_backend.config import settings
from gym_backend.core.security import get_password_hash
from gym_backend.models import User
from gym_backend.models.enums import UserRole
from gym_backend.utils.logger import logger


def _build_bootstrap_admin() -> User:
    """Super user that can create gyms and their admins."""
    return User(
        username=settings.bootstrap_admin_username,
        email=settings.bootstrap_admin_email,
        role=UserRole.SUPER_USER,
        password_hash=get_password_hash(settings.bootstrap_admin_password),
        active=True,
        first_name="Super",
        last_name="Admin",
        gym_id=None,
    )


def seed_if_empty(engine) -> None:
    """Create the bootstrap super user if the users table is empty.

    Args:
        engine: SQLAlchemy engine instance. A session is created from this
                engine to perform the seed in a single transaction.
    """
    session = Session(bind=engine)
    try:
        user_count = session.execute(text("SELECT COUNT(*) FROM users")).scalar()
        if user_count > 0:
            return

        session.add(_build_bootstrap_admin())
        session.commit()
        logger.info(
            f"Database seeded: bootstrap super user '{settings.bootstrap_admin_username}'"
        )
        if settings.bootstrap_admin_password == "changeme123":
            logger.warning("Bootstrap super user has the default password, change it")
    except Exception:
        session.rollback()
        logger.exception("Failed to seed database")
    finally:
        session.close()
