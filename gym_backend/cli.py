"""Command-line interface for the gym backend."""

import click
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from .config import settings
from .database import Base, SessionLocal, engine, init_db
from .models import UserRole
from .services.member_code_generator import (
    MalformedMemberCode,
    MemberCodeGenerator,
    SqlMemberCodeStore,
    local_today,
    parse_sequence,
)
from .services.user_service import UserService
from .utils.logger import logger


@click.group()
def cli():
    """Gym backend CLI."""
    pass


# Database commands
@cli.group()
def db():
    """Database management commands."""
    pass


@db.command()
def init():
    """Initialize the database (migrations and bootstrap super user)."""
    click.echo("Initializing database...")
    try:
        init_db()
        click.echo("✅ Database initialized successfully!")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)


@db.command()
@click.confirmation_option(prompt="Are you sure you want to drop all tables?")
def reset():
    """Reset the database (drop and recreate all tables)."""
    click.echo("Resetting database...")
    try:
        import gym_backend.models  # noqa: F401 - register all models with Base.metadata

        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        click.echo("✅ Database reset successfully!")
    except Exception as e:
        logger.error(f"Database reset failed: {e}")
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)


# User commands
@cli.group()
def user():
    """User management commands."""
    pass


@user.command("create-superuser")
@click.option("--username", prompt=True, help="Username")
@click.option("--email", prompt=True, help="Email address")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def create_superuser(username, email, password):
    """Create a super user (not bound to any gym)."""
    db = SessionLocal()
    try:
        created = UserService().create_user(
            db,
            username=username,
            email=email,
            password=password,
            role=UserRole.SUPER_USER,
        )
        click.echo(f"✅ Super user created: {created.username} (ID: {created.id})")
    except ValueError as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)
    finally:
        db.close()


# Member code commands
@cli.group("member-code")
def member_code():
    """Member code commands."""
    pass


@member_code.command("next")
def next_code():
    """Show the next member code without reserving it."""
    generator = MemberCodeGenerator(
        SqlMemberCodeStore(SessionLocal),
        clock=local_today(settings.member_code_timezone),
        max_retries=settings.member_code_max_retries,
    )
    generator.initialize()
    click.echo(generator.preview_next_code())


@member_code.command("parse")
@click.argument("code")
def parse(code):
    """Show the day and sequence encoded in CODE."""
    code = code.strip().upper()
    day = code[1:9]
    try:
        sequence = parse_sequence(code, day)
    except MalformedMemberCode as e:
        click.echo(f"❌ {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Day: {day[:4]}-{day[4:6]}-{day[6:]} | Sequence: {sequence}")


if __name__ == "__main__":
    cli()
