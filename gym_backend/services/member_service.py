"""Member service for managing gym members."""

from datetime import date, timedelta
from typing import Optional, List, Dict, Any, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from gym_backend.config import settings
from gym_backend.models import Member, MemberMembership, MemberStatus, MembershipStatus
from gym_backend.services.base import BaseService
from gym_backend.services.member_code_generator import (
    CodeGenerationExhausted,
    MemberCodeGenerator,
)
from gym_backend.utils.logger import logger


class MemberService(BaseService[Member]):
    """
    Service for managing members.

    Provides functionality for:
    - Creating members with generated member codes
    - Gym-scoped email/phone uniqueness
    - Search, expiring-membership lookups and counts
    """

    def __init__(
        self,
        code_generator: Optional[MemberCodeGenerator] = None,
        insert_attempts: Optional[int] = None,
    ):
        """
        Initialize member service.

        Args:
            code_generator: Shared generator; required only for create_member
            insert_attempts: Attempts when an insert hits the member_code constraint
        """
        super().__init__(Member)
        self.code_generator = code_generator
        self.insert_attempts = insert_attempts or settings.member_code_insert_attempts

    def get_by_code(self, db: Session, member_code: str) -> Optional[Member]:
        return db.query(Member).filter(Member.member_code == member_code).first()

    def _check_contact_unique(
        self,
        db: Session,
        gym_id: Optional[int],
        email: Optional[str],
        phone: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        """Email and phone are unique within a gym."""
        checks = []
        if email:
            checks.append(("email", Member.email == email.strip().lower()))
        if phone:
            checks.append(("phone", Member.phone == phone.strip()))

        for field, condition in checks:
            query = db.query(Member.id).filter(Member.gym_id == gym_id, condition)
            if exclude_id is not None:
                query = query.filter(Member.id != exclude_id)
            if query.first() is not None:
                raise ValueError(f"A member with this {field} already exists in this gym")

    def create_member(self, db: Session, data: Dict[str, Any]) -> Member:
        """
        Create a member with a freshly generated member code.

        A code that passed the generator's existence check can still be taken
        by a concurrent insert; such constraint violations are retried with a
        new code.

        Args:
            db: Database session
            data: Member fields (member_code, status and join_date are assigned here)

        Returns:
            Created member

        Raises:
            ValueError: If validation fails
            CodeGenerationExhausted: If no free code could be inserted
            SequenceExhausted: If today's code space is used up
        """
        if self.code_generator is None:
            raise RuntimeError("MemberService needs a code generator to create members")

        fields = {
            k: v for k, v in data.items()
            if k not in ("member_code", "status", "join_date", "id")
        }
        logger.info(
            f"Creating new member: {fields.get('first_name')} {fields.get('last_name')}"
        )
        self._check_contact_unique(
            db, fields.get("gym_id"), fields.get("email"), fields.get("phone")
        )

        for attempt in range(1, self.insert_attempts + 1):
            member_code = self.code_generator.generate_unique_code()
            member = Member(
                member_code=member_code,
                status=MemberStatus.ACTIVE,
                join_date=self.code_generator.clock(),
                **fields,
            )
            db.add(member)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if "member_code" in str(e.orig):
                    logger.warning(
                        f"Member code {member_code} taken at insert "
                        f"(attempt {attempt}/{self.insert_attempts}), retrying"
                    )
                    continue
                logger.error(f"Error creating member: {e}")
                raise ValueError("Member violates a uniqueness constraint") from e

            db.refresh(member)
            logger.info(f"Member created successfully with ID: {member.id}, code {member_code}")
            return member

        raise CodeGenerationExhausted(
            f"Could not insert member after {self.insert_attempts} code collisions"
        )

    def update_member(self, db: Session, member: Member, data: Dict[str, Any]) -> Member:
        """
        Update member details. The member code is never changed.

        Raises:
            ValueError: If the new email/phone is taken within the gym
        """
        data = {k: v for k, v in data.items() if k not in ("member_code", "id")}
        self._check_contact_unique(
            db,
            data.get("gym_id", member.gym_id),
            data.get("email"),
            data.get("phone"),
            exclude_id=member.id,
        )
        logger.info(f"Updating member with ID: {member.id}")
        return self.update(db, member, data)

    def search_members(
        self,
        db: Session,
        search_term: Optional[str] = None,
        gym_id: Optional[int] = None,
        status: Optional[MemberStatus] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Member], int]:
        """
        Search members by name, email, phone or member code.

        Returns:
            (page of members, total matching count)
        """
        query = db.query(Member)
        if gym_id is not None:
            query = query.filter(Member.gym_id == gym_id)
        if status is not None:
            query = query.filter(Member.status == status)
        if search_term:
            term = f"%{search_term.strip()}%"
            query = query.filter(
                or_(
                    Member.first_name.ilike(term),
                    Member.last_name.ilike(term),
                    Member.email.ilike(term),
                    Member.phone.like(term),
                    Member.member_code.like(term),
                )
            )
        total = query.count()
        members = query.order_by(Member.member_code.desc()).offset(skip).limit(limit).all()
        return members, total

    def get_members_with_expiring_memberships(
        self,
        db: Session,
        days_before_expiry: int,
        gym_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[Member]:
        """Active members holding an active membership that ends within the window."""
        today = today or date.today()
        expiry_date = today + timedelta(days=days_before_expiry)
        query = (
            db.query(Member)
            .join(MemberMembership, MemberMembership.member_id == Member.id)
            .filter(
                Member.status == MemberStatus.ACTIVE,
                MemberMembership.status == MembershipStatus.ACTIVE,
                MemberMembership.end_date <= expiry_date,
            )
        )
        if gym_id is not None:
            query = query.filter(Member.gym_id == gym_id)
        return query.distinct().order_by(Member.id).all()

    def count_active(self, db: Session, gym_id: Optional[int] = None) -> int:
        return self.count(db, {"status": MemberStatus.ACTIVE, "gym_id": gym_id})
