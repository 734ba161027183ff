"""API endpoint tests using FastAPI TestClient."""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gym_backend.main import app
from gym_backend.database import Base
from gym_backend.dependencies import get_db, get_current_user
from gym_backend.core.rate_limit import limiter
from gym_backend.core.security import create_access_token
from gym_backend.core.token_store import RedisTokenStore
from gym_backend.models import MemberMembership
from gym_backend.models.enums import UserRole, MembershipStatus
from gym_backend.services.member_code_generator import MemberCodeGenerator, SqlMemberCodeStore
from gym_backend.services.user_service import UserService
from conftest import FIXED_DAY, FakeCodeStore, FakeRedis


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def test_db():
    """Create test database tables."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def acting_user(sample_user):
    """Holder for the user the client is authenticated as."""
    return {"user": sample_user}


@pytest.fixture
def client(test_db, acting_user):
    """Create test client with overridden dependencies."""
    app.dependency_overrides[get_db] = override_get_db

    async def override_get_current_user():
        return acting_user["user"]

    app.dependency_overrides[get_current_user] = override_get_current_user
    limiter.enabled = False

    with TestClient(app) as c:
        app.state.member_code_generator = MemberCodeGenerator(
            SqlMemberCodeStore(TestingSessionLocal), clock=lambda: FIXED_DAY
        )
        yield c

    limiter.enabled = True
    app.dependency_overrides.clear()


def _make_user(db, username, role, gym_id=None):
    return UserService().create_user(
        db,
        username=username,
        email=f"{username}@example.com",
        password="password123",
        role=role,
        gym_id=gym_id,
    )


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthEndpoints:
    """Test authentication endpoints."""

    def test_login_success(self, client, sample_user, sample_gym):
        response = client.post(
            "/api/v1/auth/login",
            data={"username": "testuser", "password": "testpass123"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["access_token"]
        assert body["refresh_token"]
        assert body["token_type"] == "bearer"
        assert body["username"] == "testuser"
        assert body["role"] == "admin"
        assert body["gym_id"] == sample_gym.id

    def test_login_wrong_password(self, client, sample_user):
        response = client.post(
            "/api/v1/auth/login",
            data={"username": "testuser", "password": "wrong"},
        )
        assert response.status_code == 401

    def test_login_disabled_user(self, client, test_db, sample_user):
        sample_user.active = False
        test_db.commit()
        response = client.post(
            "/api/v1/auth/login",
            data={"username": "testuser", "password": "testpass123"},
        )
        # Inactive users fail the password check
        assert response.status_code in (401, 403)

    def test_me_with_real_token(self, client, sample_user):
        app.dependency_overrides.pop(get_current_user)
        token = create_access_token(subject=sample_user.id)

        response = client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200
        assert response.json()["username"] == "testuser"

        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer junk"})
        assert response.status_code == 401

    def test_auth_works_while_redis_is_down(self, client, sample_user):
        app.dependency_overrides.pop(get_current_user)
        app.state.token_store = RedisTokenStore(FakeRedis(down=True))
        try:
            login = client.post(
                "/api/v1/auth/login",
                data={"username": "testuser", "password": "testpass123"},
            )
            assert login.status_code == 200
            headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

            me = client.get("/api/v1/auth/me", headers=headers)
            assert me.status_code == 200
            assert me.json()["username"] == "testuser"

            assert client.post("/api/v1/auth/logout", headers=headers).status_code == 200
        finally:
            app.state.token_store = None

    def test_refresh(self, client, sample_user):
        login = client.post(
            "/api/v1/auth/login",
            data={"username": "testuser", "password": "testpass123"},
        ).json()

        response = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]}
        )
        assert response.status_code == 200
        assert response.json()["access_token"]

        response = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": login["access_token"]}
        )
        assert response.status_code == 401


class TestMemberEndpoints:
    """Test member endpoints."""

    def _payload(self, **overrides):
        data = {
            "first_name": "Ravi",
            "last_name": "Kumar",
            "email": "ravi@example.com",
            "phone": "9000000002",
        }
        data.update(overrides)
        return data

    def test_create_member_generates_code(self, client, sample_gym):
        response = client.post("/api/v1/members", json=self._payload())
        assert response.status_code == 201
        body = response.json()
        assert body["member_code"] == "M202404070001"
        assert body["gym_id"] == sample_gym.id
        assert body["status"] == "active"

        second = client.post(
            "/api/v1/members", json=self._payload(email="b@example.com", phone="9000000003")
        )
        assert second.json()["member_code"] == "M202404070002"

    def test_create_member_ignores_supplied_code(self, client):
        response = client.post(
            "/api/v1/members", json=self._payload(member_code="M209912319999")
        )
        assert response.status_code == 201
        assert response.json()["member_code"] == "M202404070001"

    def test_create_member_skips_existing_code(self, client, sample_member):
        response = client.post("/api/v1/members", json=self._payload())
        assert response.status_code == 201
        assert response.json()["member_code"] == "M202404070002"

    def test_duplicate_phone_is_400(self, client, sample_member):
        response = client.post(
            "/api/v1/members", json=self._payload(phone=sample_member.phone)
        )
        assert response.status_code == 400

    def test_code_allocation_failure_is_503(self, client):
        app.state.member_code_generator = MemberCodeGenerator(
            FakeCodeStore(always_exists=True), clock=lambda: FIXED_DAY
        )
        response = client.post("/api/v1/members", json=self._payload())
        assert response.status_code == 503

    def test_next_code_preview(self, client, sample_member):
        app.state.member_code_generator.initialize()
        response = client.get("/api/v1/members/next-code")
        assert response.status_code == 200
        assert response.json()["member_code"] == "M202404070002"

    def test_get_by_code(self, client, sample_member):
        response = client.get("/api/v1/members/code/m202404070001")
        assert response.status_code == 200
        assert response.json()["id"] == sample_member.id

        response = client.get("/api/v1/members/code/M202404070099")
        assert response.status_code == 404

    def test_update_cannot_change_code(self, client, sample_member):
        response = client.patch(
            f"/api/v1/members/{sample_member.id}",
            json={"city": "Nagpur", "member_code": "M209901010001"},
        )
        assert response.status_code == 200
        assert response.json()["city"] == "Nagpur"
        assert response.json()["member_code"] == "M202404070001"

    def test_list_and_search(self, client, sample_member):
        response = client.get("/api/v1/members", params={"search": "asha"})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["member_code"] == sample_member.member_code

    def test_other_gym_is_forbidden(self, client, test_db, acting_user, other_gym, sample_member):
        acting_user["user"] = _make_user(test_db, "otheradmin", UserRole.ADMIN, other_gym.id)

        assert client.get(f"/api/v1/members/{sample_member.id}").status_code == 403
        assert (
            client.get("/api/v1/members", params={"gym_id": sample_member.gym_id}).status_code
            == 403
        )

    def test_trainer_cannot_register(self, client, test_db, acting_user, sample_gym):
        acting_user["user"] = _make_user(test_db, "coach", UserRole.TRAINER, sample_gym.id)

        assert client.post("/api/v1/members", json=self._payload()).status_code == 403
        assert client.get("/api/v1/members").status_code == 200

    def test_delete_member(self, client, sample_member):
        response = client.delete(f"/api/v1/members/{sample_member.id}")
        assert response.status_code == 204
        assert client.get(f"/api/v1/members/{sample_member.id}").status_code == 404


class TestGymEndpoints:
    """Test gym endpoints."""

    def test_only_super_user_creates_gyms(self, client, test_db, acting_user):
        payload = {"gym_code": "GYM009", "name": "Pulse"}
        assert client.post("/api/v1/gyms", json=payload).status_code == 403

        acting_user["user"] = _make_user(test_db, "root", UserRole.SUPER_USER)
        response = client.post("/api/v1/gyms", json=payload)
        assert response.status_code == 201
        assert response.json()["gym_code"] == "GYM009"

        assert client.post("/api/v1/gyms", json=payload).status_code == 400

    def test_gym_admin_sees_own_gym(self, client, sample_gym, other_gym):
        response = client.get("/api/v1/gyms")
        assert [g["id"] for g in response.json()] == [sample_gym.id]
        assert client.get(f"/api/v1/gyms/{other_gym.id}").status_code == 403

    def test_stats(self, client, sample_gym, sample_member):
        response = client.get(f"/api/v1/gyms/{sample_gym.id}/stats")
        assert response.status_code == 200
        assert response.json()["total_members"] == 1


class TestAttendanceEndpoints:
    """Test attendance endpoints."""

    def test_check_in_by_code_then_out(self, client, sample_member):
        response = client.post(
            "/api/v1/attendance/check-in", json={"member_code": sample_member.member_code}
        )
        assert response.status_code == 201
        assert response.json()["check_out"] is None

        again = client.post(
            "/api/v1/attendance/check-in", json={"member_id": sample_member.id}
        )
        assert again.status_code == 400

        out = client.post(
            "/api/v1/attendance/check-out", json={"member_id": sample_member.id}
        )
        assert out.status_code == 200
        assert out.json()["check_out"] is not None

    def test_member_required(self, client):
        assert client.post("/api/v1/attendance/check-in", json={}).status_code == 400


class TestPaymentEndpoints:
    """Test payment endpoints."""

    def test_record_and_list(self, client, sample_member, sample_plan):
        response = client.post(
            "/api/v1/payments",
            json={
                "member_id": sample_member.id,
                "membership_plan_id": sample_plan.id,
                "amount": "3000.00",
                "payment_method": "cash",
            },
        )
        assert response.status_code == 201
        assert response.json()["status"] == "completed"

        payments = client.get(f"/api/v1/payments/member/{sample_member.id}").json()
        assert len(payments) == 1

    def test_dashboard_today_expires(self, client, test_db, sample_member, sample_plan):
        today = date.today()
        test_db.add(
            MemberMembership(
                member_id=sample_member.id,
                plan_id=sample_plan.id,
                gym_id=sample_member.gym_id,
                start_date=today - timedelta(days=90),
                end_date=today,
                amount_paid=Decimal("3000"),
                status=MembershipStatus.ACTIVE,
            )
        )
        test_db.commit()

        response = client.get(
            "/api/v1/payments/dashboard", params={"filter": "today_expires"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total_count"] == 1
        assert body["payments"][0]["member_code"] == "M202404070001"
        assert body["payments"][0]["notes"] == "Membership expires today - Gold"
