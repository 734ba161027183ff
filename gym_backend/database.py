"""Database configuration and session management."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from gym_backend.config import settings
from gym_backend.utils.logger import logger

# Path to alembic.ini relative to this file (gym_backend/database.py -> alembic.ini)
_ALEMBIC_INI = str(Path(__file__).parent.parent / "alembic.ini")

_connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args=_connect_args,
)

# Create session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# Create base class for models
Base = declarative_base()


def get_db():
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database using Alembic migrations, then seed if empty.

    Strategy:
    - Fresh DB (no tables): create_all() for full schema, then stamp Alembic at head.
    - Existing DB without alembic_version: stamp at head.
    - Existing DB with alembic_version: upgrade to apply pending migrations.
    - No alembic.ini (installed package, tests): fall back to create_all() only.
    """
    import gym_backend.models  # noqa: F401 - register all models with Base.metadata

    alembic_ini = Path(_ALEMBIC_INI)
    if alembic_ini.exists():
        try:
            from alembic.config import Config
            from alembic import command
            from sqlalchemy import inspect, text

            alembic_cfg = Config(str(alembic_ini))
            alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
            inspector = inspect(engine)
            has_tables = bool(inspector.get_table_names())
            has_alembic = inspector.has_table("alembic_version")

            alembic_has_revision = False
            if has_alembic:
                with engine.connect() as conn:
                    row = conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1")).first()
                    alembic_has_revision = row is not None

            if not has_tables:
                Base.metadata.create_all(bind=engine)
                command.stamp(alembic_cfg, "head")
                logger.info("Fresh database initialized and stamped at Alembic head")
            elif not alembic_has_revision:
                command.stamp(alembic_cfg, "head")
                logger.info("Stamped existing database at Alembic head")
            else:
                command.upgrade(alembic_cfg, "head")
                logger.info("Database migrations applied successfully")
        except Exception as e:
            logger.error(f"Error running database migrations: {e}")
            raise
    else:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created with create_all (no alembic.ini found)")

    from gym_backend.seed import seed_if_empty
    seed_if_empty(engine)
