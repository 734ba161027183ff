"""Pytest configuration and fixtures."""

import os

# Keep tests hermetic: in-memory database, no log file, no Redis
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_FILE"] = ""
os.environ.pop("REDIS_URL", None)

import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from redis.exceptions import ConnectionError as RedisConnectionError

from gym_backend.database import Base
from gym_backend.models import Gym, Member, MembershipPlan
from gym_backend.models.enums import UserRole, MemberStatus
from gym_backend.services.member_code_generator import MemberCodeGenerator

FIXED_DAY = date(2024, 4, 7)


class FakeRedis:
    """Dict-backed stand-in for the few Redis commands the token store uses."""

    def __init__(self, fail_ping=False, down=False):
        self.data = {}
        self.expiries = {}
        self.fail_ping = fail_ping or down
        self.down = down

    def _check(self):
        if self.down:
            raise RedisConnectionError("connection refused")

    def set(self, key, value, ex=None):
        self._check()
        self.data[key] = value
        self.expiries[key] = ex

    def get(self, key):
        self._check()
        return self.data.get(key)

    def delete(self, *keys):
        self._check()
        for key in keys:
            self.data.pop(key, None)

    def ping(self):
        if self.fail_ping:
            raise RedisConnectionError("connection refused")
        return True

    def close(self):
        pass


class FakeCodeStore:
    """In-memory MemberCodeStore."""

    def __init__(self, codes=None, always_exists=False):
        self.codes = set(codes or [])
        self.always_exists = always_exists
        self.lookups = []

    def exists_by_code(self, code):
        self.lookups.append(code)
        return self.always_exists or code in self.codes

    def find_codes_by_prefix(self, prefix):
        return sorted((c for c in self.codes if c.startswith(prefix)), reverse=True)


@pytest.fixture(scope="function")
def test_db():
    """Create a test database session."""
    # Use in-memory SQLite for tests
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def fake_store():
    """Empty fake code store."""
    return FakeCodeStore()


@pytest.fixture
def code_generator(fake_store):
    """Generator over the fake store with a fixed clock."""
    return MemberCodeGenerator(fake_store, clock=lambda: FIXED_DAY)


@pytest.fixture
def sample_gym(test_db):
    """Create a sample gym."""
    gym = Gym(gym_code="GYM001", name="Iron Temple", city="Pune")
    test_db.add(gym)
    test_db.commit()
    test_db.refresh(gym)
    return gym


@pytest.fixture
def other_gym(test_db):
    """Create a second gym."""
    gym = Gym(gym_code="GYM002", name="Flex Factory", city="Mumbai")
    test_db.add(gym)
    test_db.commit()
    test_db.refresh(gym)
    return gym


@pytest.fixture
def sample_user(test_db, sample_gym):
    """Create a sample gym admin."""
    from gym_backend.services.user_service import UserService

    service = UserService()
    user = service.create_user(
        test_db,
        username="testuser",
        email="test@example.com",
        password="testpass123",
        role=UserRole.ADMIN,
        gym_id=sample_gym.id,
    )
    return user


@pytest.fixture
def sample_member(test_db, sample_gym):
    """Create a sample member with a fixed code."""
    member = Member(
        member_code="M202404070001",
        first_name="Asha",
        last_name="Rao",
        email="asha@example.com",
        phone="9000000001",
        gym_id=sample_gym.id,
        status=MemberStatus.ACTIVE,
        join_date=FIXED_DAY,
    )
    test_db.add(member)
    test_db.commit()
    test_db.refresh(member)
    return member


@pytest.fixture
def sample_plan(test_db, sample_gym):
    """Create a sample three month plan."""
    plan = MembershipPlan(
        gym_id=sample_gym.id,
        name="Gold",
        duration_months=3,
        price=Decimal("3000.00"),
    )
    test_db.add(plan)
    test_db.commit()
    test_db.refresh(plan)
    return plan
