"""Tests for service classes."""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError

from gym_backend.models import (
    Attendance,
    Member,
    MemberMembership,
    Payment,
)
from gym_backend.models.enums import (
    UserRole,
    MemberStatus,
    MembershipStatus,
    PaymentMethod,
    PaymentStatus,
    PaymentFilter,
)
from gym_backend.services import (
    AttendanceService,
    CodeGenerationExhausted,
    GymService,
    MemberMembershipService,
    MemberService,
    MembershipPlanService,
    MemberCodeGenerator,
    PaymentService,
    TrainerService,
    UserService,
)
from gym_backend.services.membership_service import add_months
from conftest import FIXED_DAY, FakeCodeStore


def _member_data(gym_id, **overrides):
    data = {
        "first_name": "Ravi",
        "last_name": "Kumar",
        "email": "ravi@example.com",
        "phone": "9000000002",
        "gym_id": gym_id,
    }
    data.update(overrides)
    return data


class TestMemberService:
    """Test MemberService."""

    def test_create_member_assigns_code(self, test_db, sample_gym, code_generator):
        service = MemberService(code_generator)

        member = service.create_member(test_db, _member_data(sample_gym.id))

        assert member.id is not None
        assert member.member_code == "M202404070001"
        assert member.status == MemberStatus.ACTIVE
        assert member.join_date == FIXED_DAY

    def test_client_supplied_code_is_ignored(self, test_db, sample_gym, code_generator):
        service = MemberService(code_generator)

        member = service.create_member(
            test_db,
            _member_data(sample_gym.id, member_code="M209901019999", status=MemberStatus.EXPIRED),
        )

        assert member.member_code == "M202404070001"
        assert member.status == MemberStatus.ACTIVE

    def test_insert_collision_is_retried(self, test_db, sample_gym, sample_member):
        # The store cannot see sample_member (M202404070001), so only the
        # UNIQUE constraint catches the collision
        generator = MemberCodeGenerator(FakeCodeStore(), clock=lambda: FIXED_DAY)
        service = MemberService(generator, insert_attempts=3)

        member = service.create_member(test_db, _member_data(sample_gym.id))

        assert member.member_code == "M202404070002"
        assert test_db.query(Member).count() == 2

    def test_insert_collisions_exhaust(self, test_db, sample_gym):
        for n in range(1, 4):
            test_db.add(
                Member(
                    member_code=f"M2024040700{n:02d}",
                    first_name="Existing",
                    last_name=str(n),
                    phone=f"80000000{n:02d}",
                    gym_id=sample_gym.id,
                )
            )
        test_db.commit()
        generator = MemberCodeGenerator(FakeCodeStore(), clock=lambda: FIXED_DAY)
        service = MemberService(generator, insert_attempts=3)

        with pytest.raises(CodeGenerationExhausted):
            service.create_member(test_db, _member_data(sample_gym.id))
        assert test_db.query(Member).count() == 3

    def test_other_integrity_errors_keep_their_cause(
        self, test_db, sample_gym, code_generator, monkeypatch
    ):
        def failing_commit():
            raise IntegrityError(
                "INSERT INTO members", {}, Exception("UNIQUE constraint failed: members.email")
            )

        monkeypatch.setattr(test_db, "commit", failing_commit)
        service = MemberService(code_generator)

        with pytest.raises(ValueError, match="uniqueness") as excinfo:
            service.create_member(test_db, _member_data(sample_gym.id))

        assert isinstance(excinfo.value.__cause__, IntegrityError)
        assert code_generator.preview_next_code() == "M202404070002"

    def test_email_unique_within_gym(self, test_db, sample_gym, other_gym, sample_member, code_generator):
        service = MemberService(code_generator)

        with pytest.raises(ValueError, match="email"):
            service.create_member(
                test_db, _member_data(sample_gym.id, email=sample_member.email)
            )

        # Same email in another gym is fine
        member = service.create_member(
            test_db, _member_data(other_gym.id, email=sample_member.email)
        )
        assert member.gym_id == other_gym.id

    def test_phone_unique_within_gym(self, test_db, sample_gym, sample_member, code_generator):
        service = MemberService(code_generator)

        with pytest.raises(ValueError, match="phone"):
            service.create_member(
                test_db, _member_data(sample_gym.id, phone=sample_member.phone)
            )

    def test_create_requires_generator(self, test_db, sample_gym):
        with pytest.raises(RuntimeError):
            MemberService().create_member(test_db, _member_data(sample_gym.id))

    def test_update_keeps_member_code(self, test_db, sample_member):
        service = MemberService()

        updated = service.update_member(
            test_db, sample_member, {"city": "Nagpur", "member_code": "M209901010001"}
        )

        assert updated.city == "Nagpur"
        assert updated.member_code == "M202404070001"

    def test_member_code_is_immutable_on_model(self, sample_member):
        with pytest.raises(ValueError):
            sample_member.member_code = "M202404070099"

    def test_search_members(self, test_db, sample_gym, sample_member, code_generator):
        service = MemberService(code_generator)
        service.create_member(test_db, _member_data(sample_gym.id))

        members, total = service.search_members(test_db, "asha", gym_id=sample_gym.id)
        assert total == 1
        assert members[0].id == sample_member.id

        members, total = service.search_members(test_db, "M20240407", gym_id=sample_gym.id)
        assert total == 2
        # Newest code first
        assert members[0].member_code == "M202404070002"

    def test_expiring_memberships(self, test_db, sample_gym, sample_member, sample_plan):
        test_db.add(
            MemberMembership(
                member_id=sample_member.id,
                plan_id=sample_plan.id,
                gym_id=sample_gym.id,
                start_date=FIXED_DAY - timedelta(days=80),
                end_date=FIXED_DAY + timedelta(days=5),
                amount_paid=Decimal("3000"),
                status=MembershipStatus.ACTIVE,
            )
        )
        test_db.commit()
        service = MemberService()

        assert service.get_members_with_expiring_memberships(
            test_db, 7, gym_id=sample_gym.id, today=FIXED_DAY
        ) == [sample_member]
        assert service.get_members_with_expiring_memberships(
            test_db, 3, gym_id=sample_gym.id, today=FIXED_DAY
        ) == []

    def test_count_active(self, test_db, sample_gym, sample_member):
        service = MemberService()
        assert service.count_active(test_db, gym_id=sample_gym.id) == 1
        service.update_member(test_db, sample_member, {"status": MemberStatus.SUSPENDED})
        assert service.count_active(test_db, gym_id=sample_gym.id) == 0


class TestUserService:
    """Test UserService."""

    def test_create_user_hashes_password(self, test_db, sample_gym):
        service = UserService()

        user = service.create_user(
            test_db,
            username="frontdesk",
            email="desk@example.com",
            password="deskpass1",
            role=UserRole.RECEPTIONIST,
            gym_id=sample_gym.id,
        )

        assert user.password_hash != "deskpass1"
        assert user.check_password("deskpass1")
        assert service.authenticate(test_db, "frontdesk", "deskpass1") == user
        assert service.authenticate(test_db, "frontdesk", "wrong") is None

    def test_default_role_is_member(self, test_db, sample_gym):
        user = UserService().create_user(
            test_db, "someone", "someone@example.com", "secret12", gym_id=sample_gym.id
        )
        assert user.role == UserRole.MEMBER

    def test_super_user_has_no_gym(self, test_db, sample_gym):
        user = UserService().create_user(
            test_db,
            "root",
            "root@example.com",
            "secret12",
            role=UserRole.SUPER_USER,
            gym_id=sample_gym.id,
        )
        assert user.gym_id is None

    def test_duplicate_username_rejected(self, test_db, sample_user):
        with pytest.raises(ValueError, match="already exists"):
            UserService().create_user(test_db, "testuser", "other@example.com", "secret12")

    def test_unknown_gym_rejected(self, test_db):
        with pytest.raises(ValueError, match="Gym not found"):
            UserService().create_user(
                test_db, "ghost", "ghost@example.com", "secret12", gym_id=999
            )

    def test_visible_users_are_gym_scoped(self, test_db, sample_gym, other_gym, sample_user):
        service = UserService()
        outsider = service.create_user(
            test_db, "outsider", "out@example.com", "secret12", gym_id=other_gym.id
        )
        root = service.create_user(
            test_db, "root", "root@example.com", "secret12", role=UserRole.SUPER_USER
        )

        assert service.list_visible_users(test_db, sample_user) == [sample_user]
        assert {u.id for u in service.list_visible_users(test_db, root)} == {
            sample_user.id,
            outsider.id,
            root.id,
        }

    def test_deactivate(self, test_db, sample_user):
        UserService().deactivate(test_db, sample_user)
        assert sample_user.active is False
        assert not sample_user.check_password("testpass123")


class TestGymService:
    """Test GymService."""

    def test_duplicate_gym_code(self, test_db, sample_gym):
        with pytest.raises(ValueError, match="already exists"):
            GymService().create_gym(test_db, {"gym_code": "GYM001", "name": "Copy"})

    def test_stats(self, test_db, sample_gym, sample_member, sample_user):
        today = date.today()
        test_db.add_all(
            [
                Payment(
                    member_id=sample_member.id,
                    gym_id=sample_gym.id,
                    amount=Decimal("1500"),
                    payment_method=PaymentMethod.CASH,
                    status=PaymentStatus.COMPLETED,
                    payment_date=datetime.combine(today, datetime.min.time()) + timedelta(hours=9),
                ),
                Payment(
                    member_id=sample_member.id,
                    gym_id=sample_gym.id,
                    amount=Decimal("500"),
                    payment_method=PaymentMethod.UPI,
                    status=PaymentStatus.PENDING,
                ),
                Attendance(
                    member_id=sample_member.id,
                    gym_id=sample_gym.id,
                    check_in=datetime.combine(today, datetime.min.time()) + timedelta(hours=7),
                ),
            ]
        )
        test_db.commit()

        stats = GymService().get_stats(test_db, sample_gym.id, today=today)

        assert stats["total_members"] == 1
        assert stats["active_members"] == 1
        assert stats["staff"] == 1
        assert stats["todays_attendance"] == 1
        assert stats["todays_revenue"] == Decimal("1500")
        assert stats["month_revenue"] == Decimal("1500")
        assert stats["pending_amount"] == Decimal("500")


class TestTrainerService:
    """Test TrainerService."""

    def _trainer_data(self, **overrides):
        data = {
            "first_name": "Vik",
            "last_name": "Singh",
            "email": "vik@example.com",
            "phone": "9111111111",
            "specialization": "Strength and Conditioning",
        }
        data.update(overrides)
        return data

    def test_user_must_be_trainer(self, test_db, sample_user):
        with pytest.raises(ValueError, match="not a TRAINER"):
            TrainerService().create_trainer(test_db, self._trainer_data(user_id=sample_user.id))

    def test_trainer_inherits_user_gym(self, test_db, sample_gym):
        user = UserService().create_user(
            test_db, "coach", "coach@example.com", "secret12",
            role=UserRole.TRAINER, gym_id=sample_gym.id,
        )
        trainer = TrainerService().create_trainer(test_db, self._trainer_data(user_id=user.id))
        assert trainer.gym_id == sample_gym.id

        with pytest.raises(ValueError, match="already exists"):
            TrainerService().create_trainer(
                test_db, self._trainer_data(user_id=user.id, email="other@example.com")
            )

    def test_gym_mismatch_rejected(self, test_db, sample_gym, other_gym):
        user = UserService().create_user(
            test_db, "coach", "coach@example.com", "secret12",
            role=UserRole.TRAINER, gym_id=sample_gym.id,
        )
        with pytest.raises(ValueError, match="belongs to gym"):
            TrainerService().create_trainer(
                test_db, self._trainer_data(user_id=user.id, gym_id=other_gym.id)
            )

    def test_email_unique(self, test_db, sample_gym):
        service = TrainerService()
        service.create_trainer(test_db, self._trainer_data(gym_id=sample_gym.id))
        with pytest.raises(ValueError, match="Email"):
            service.create_trainer(test_db, self._trainer_data(gym_id=sample_gym.id, phone="9222"))

    def test_filters_and_rating(self, test_db, sample_gym):
        service = TrainerService()
        trainer = service.create_trainer(test_db, self._trainer_data(gym_id=sample_gym.id))
        service.create_trainer(
            test_db,
            self._trainer_data(
                email="yoga@example.com", specialization="Yoga", gym_id=sample_gym.id
            ),
        )

        assert [t.email for t in service.list_trainers(test_db, specialization="strength")] == [
            "vik@example.com"
        ]

        service.add_rating(test_db, trainer, Decimal("5"))
        service.add_rating(test_db, trainer, Decimal("4"))
        assert trainer.rating == Decimal("4.50")
        assert trainer.total_ratings == 2
        assert service.get_top_rated(test_db, Decimal("4.0"), gym_id=sample_gym.id) == [trainer]

        with pytest.raises(ValueError):
            service.add_rating(test_db, trainer, Decimal("6"))


class TestMembershipServices:
    """Test MembershipPlanService and MemberMembershipService."""

    def test_add_months(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
        assert add_months(date(2024, 4, 7), 12) == date(2025, 4, 7)

    def test_plans_by_price_range(self, test_db, sample_gym, sample_plan):
        service = MembershipPlanService()
        service.create(
            test_db,
            {"gym_id": sample_gym.id, "name": "Basic", "duration_months": 1, "price": Decimal("800")},
        )

        plans = service.get_by_price_range(test_db, Decimal("500"), Decimal("1000"))
        assert [p.name for p in plans] == ["Basic"]
        assert [p.name for p in service.list_plans(test_db, gym_id=sample_gym.id)] == [
            "Basic",
            "Gold",
        ]
        with pytest.raises(ValueError):
            service.get_by_price_range(test_db, Decimal("10"), Decimal("1"))

    def test_end_date_defaults_from_plan(self, test_db, sample_member, sample_plan):
        membership = MemberMembershipService().create_membership(
            test_db,
            {"member_id": sample_member.id, "plan_id": sample_plan.id, "start_date": FIXED_DAY},
        )

        assert membership.end_date == date(2024, 7, 7)
        assert membership.amount_paid == Decimal("3000.00")
        assert membership.gym_id == sample_member.gym_id
        assert membership.status == MembershipStatus.ACTIVE

    def test_one_active_membership_per_gym(self, test_db, sample_member, sample_plan):
        service = MemberMembershipService()
        first = service.create_membership(
            test_db, {"member_id": sample_member.id, "plan_id": sample_plan.id}
        )

        with pytest.raises(ValueError, match="already has an active membership"):
            service.create_membership(
                test_db, {"member_id": sample_member.id, "plan_id": sample_plan.id}
            )

        service.update_membership(test_db, first, {"status": MembershipStatus.CANCELLED})
        second = service.create_membership(
            test_db, {"member_id": sample_member.id, "plan_id": sample_plan.id}
        )

        with pytest.raises(ValueError, match="Cannot activate"):
            service.update_membership(test_db, first, {"status": MembershipStatus.ACTIVE})
        assert [m.id for m in service.list_memberships(test_db, member_id=sample_member.id)]
        assert second.id != first.id

    def test_gym_must_match_member(self, test_db, sample_member, sample_plan, other_gym):
        with pytest.raises(ValueError, match="Member belongs to gym"):
            MemberMembershipService().create_membership(
                test_db,
                {"member_id": sample_member.id, "plan_id": sample_plan.id, "gym_id": other_gym.id},
            )

    def test_end_before_start_rejected(self, test_db, sample_member, sample_plan):
        with pytest.raises(ValueError, match="End date"):
            MemberMembershipService().create_membership(
                test_db,
                {
                    "member_id": sample_member.id,
                    "plan_id": sample_plan.id,
                    "start_date": FIXED_DAY,
                    "end_date": FIXED_DAY - timedelta(days=1),
                },
            )


class TestPaymentService:
    """Test PaymentService."""

    def test_record_payment(self, test_db, sample_member, sample_plan):
        payment = PaymentService().record_payment(
            test_db,
            {
                "member_id": sample_member.id,
                "membership_plan_id": sample_plan.id,
                "amount": Decimal("3000"),
                "payment_method": PaymentMethod.CARD,
            },
        )

        assert payment.status == PaymentStatus.COMPLETED
        assert payment.payment_date is not None
        assert payment.gym_id == sample_member.gym_id

    def test_record_payment_unknown_member(self, test_db):
        with pytest.raises(ValueError, match="Member not found"):
            PaymentService().record_payment(
                test_db,
                {"member_id": 42, "amount": Decimal("10"), "payment_method": PaymentMethod.CASH},
            )

    def test_overdue_and_pending(self, test_db, sample_gym, sample_member):
        test_db.add_all(
            [
                Payment(
                    member_id=sample_member.id, gym_id=sample_gym.id, amount=Decimal("700"),
                    payment_method=PaymentMethod.CASH, status=PaymentStatus.PENDING,
                    due_date=FIXED_DAY - timedelta(days=2),
                ),
                Payment(
                    member_id=sample_member.id, gym_id=sample_gym.id, amount=Decimal("300"),
                    payment_method=PaymentMethod.CASH, status=PaymentStatus.PENDING,
                    due_date=FIXED_DAY + timedelta(days=2),
                ),
            ]
        )
        test_db.commit()
        service = PaymentService()

        overdue = service.get_overdue_payments(test_db, gym_id=sample_gym.id, today=FIXED_DAY)
        assert [p.amount for p in overdue] == [Decimal("700")]
        assert service.get_total_pending_amount(test_db, gym_id=sample_gym.id) == Decimal("1000")

    def test_revenue_by_date(self, test_db, sample_gym, sample_member):
        at = datetime(2024, 4, 7, 18, 30)
        test_db.add_all(
            [
                Payment(
                    member_id=sample_member.id, gym_id=sample_gym.id, amount=Decimal("1000"),
                    payment_method=PaymentMethod.CASH, status=PaymentStatus.COMPLETED,
                    payment_date=at,
                ),
                Payment(
                    member_id=sample_member.id, gym_id=sample_gym.id, amount=Decimal("250"),
                    payment_method=PaymentMethod.CASH, status=PaymentStatus.COMPLETED,
                    payment_date=at - timedelta(days=3),
                ),
            ]
        )
        test_db.commit()
        service = PaymentService()

        assert service.get_total_revenue_by_date(test_db, FIXED_DAY) == Decimal("1000")
        assert service.get_current_month_total(
            test_db, gym_id=sample_gym.id, now=datetime(2024, 4, 30, 12, 0)
        ) == Decimal("1250")

    def _membership(self, member, plan, end_date, status=MembershipStatus.ACTIVE):
        return MemberMembership(
            member_id=member.id,
            plan_id=plan.id,
            gym_id=member.gym_id,
            start_date=end_date - timedelta(days=90),
            end_date=end_date,
            amount_paid=plan.price,
            status=status,
        )

    def test_dashboard_filters(self, test_db, sample_gym, sample_member, sample_plan):
        others = []
        for n in range(3):
            m = Member(
                member_code=f"M2024040700{n + 2:02d}",
                first_name="Member",
                last_name=str(n),
                phone=f"70000000{n}",
                gym_id=sample_gym.id,
            )
            test_db.add(m)
            others.append(m)
        test_db.commit()

        test_db.add_all(
            [
                self._membership(sample_member, sample_plan, FIXED_DAY),
                self._membership(others[0], sample_plan, FIXED_DAY + timedelta(days=3)),
                self._membership(others[1], sample_plan, FIXED_DAY - timedelta(days=1)),
                self._membership(others[2], sample_plan, FIXED_DAY + timedelta(days=10)),
            ]
        )
        test_db.commit()
        service = PaymentService()

        today = service.find_payments_by_filter(
            test_db, PaymentFilter.TODAY_EXPIRES, gym_id=sample_gym.id, today=FIXED_DAY
        )
        assert today["total_count"] == 1
        assert today["payments"][0]["member_id"] == sample_member.id
        assert today["payments"][0]["status"] == PaymentStatus.PENDING

        upcoming = service.find_payments_by_filter(
            test_db, PaymentFilter.UPCOMING_7_DAYS, gym_id=sample_gym.id, today=FIXED_DAY
        )
        assert upcoming["total_count"] == 1
        assert upcoming["payments"][0]["notes"] == "Membership expiring in 3 days - Gold"

        overdue = service.find_payments_by_filter(
            test_db, PaymentFilter.OVERDUES, gym_id=sample_gym.id, today=FIXED_DAY
        )
        assert overdue["total_count"] == 1
        assert overdue["payments"][0]["member_id"] == others[1].id

    def test_dashboard_recent_orders_nulls_last_and_pages(self, test_db, sample_gym, sample_member):
        for amount, paid_at in (
            ("100", datetime(2024, 4, 1, 10, 0)),
            ("200", None),
            ("300", datetime(2024, 4, 5, 10, 0)),
        ):
            test_db.add(
                Payment(
                    member_id=sample_member.id, gym_id=sample_gym.id, amount=Decimal(amount),
                    payment_method=PaymentMethod.CASH, status=PaymentStatus.PENDING,
                    payment_date=paid_at,
                )
            )
        test_db.commit()
        service = PaymentService()

        result = service.find_payments_by_filter(test_db, PaymentFilter.RECENT, gym_id=sample_gym.id)
        assert result["total_count"] == 3
        assert [p["amount"] for p in result["payments"]] == [
            Decimal("300"),
            Decimal("100"),
            Decimal("200"),
        ]

        page = service.find_payments_by_filter(
            test_db, PaymentFilter.RECENT, gym_id=sample_gym.id, page=1, size=2
        )
        assert page["total_count"] == 3
        assert [p["amount"] for p in page["payments"]] == [Decimal("200")]

    def test_dashboard_recent_pages_in_the_database(self, test_db, sample_gym, sample_member):
        for day in range(1, 6):
            test_db.add(
                Payment(
                    member_id=sample_member.id, gym_id=sample_gym.id, amount=Decimal(day),
                    payment_method=PaymentMethod.UPI, status=PaymentStatus.COMPLETED,
                    payment_date=datetime(2024, 4, day, 9, 0),
                )
            )
        test_db.commit()
        statements = []

        def capture(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        engine = test_db.get_bind()
        event.listen(engine, "before_cursor_execute", capture)
        try:
            result = PaymentService().find_payments_by_filter(
                test_db, PaymentFilter.RECENT, gym_id=sample_gym.id, page=0, size=2
            )
        finally:
            event.remove(engine, "before_cursor_execute", capture)

        assert result["total_count"] == 5
        assert [p["amount"] for p in result["payments"]] == [Decimal("5"), Decimal("4")]
        payment_selects = [s for s in statements if "FROM payments" in s and "count(" not in s]
        assert payment_selects
        assert all("LIMIT" in s for s in payment_selects)


class TestAttendanceService:
    """Test AttendanceService."""

    def test_check_in_and_out(self, test_db, sample_member):
        service = AttendanceService()
        start = datetime(2024, 4, 7, 6, 0)

        record = service.check_in(test_db, sample_member, at=start)
        assert record.is_open

        with pytest.raises(ValueError, match="already checked in"):
            service.check_in(test_db, sample_member, at=start + timedelta(minutes=5))

        closed = service.check_out(test_db, sample_member, at=start + timedelta(minutes=75))
        assert closed.duration_minutes == 75
        assert not closed.is_open

        with pytest.raises(ValueError, match="not checked in"):
            service.check_out(test_db, sample_member)
        with pytest.raises(ValueError, match="already checked out"):
            service.check_out_record(test_db, closed)

    def test_inactive_member_cannot_check_in(self, test_db, sample_member):
        sample_member.status = MemberStatus.SUSPENDED
        test_db.commit()
        with pytest.raises(ValueError, match="not active"):
            AttendanceService().check_in(test_db, sample_member)

    def test_counts_by_date(self, test_db, sample_gym, sample_member):
        service = AttendanceService()
        morning = datetime(2024, 4, 7, 6, 0)
        service.check_in(test_db, sample_member, at=morning)
        service.check_out(test_db, sample_member, at=morning + timedelta(hours=1))
        service.check_in(test_db, sample_member, at=morning + timedelta(hours=10))

        assert service.count_for_date(test_db, FIXED_DAY, gym_id=sample_gym.id) == 2
        assert service.count_members_for_date(test_db, FIXED_DAY, gym_id=sample_gym.id) == 1
        assert len(service.get_attendance_by_date(test_db, FIXED_DAY)) == 2
        assert len(service.currently_checked_in(test_db, gym_id=sample_gym.id)) == 1
        assert len(
            service.get_member_attendance(test_db, sample_member.id, start=FIXED_DAY, end=FIXED_DAY)
        ) == 2
        assert service.count_for_date(test_db, FIXED_DAY + timedelta(days=1)) == 0
