"""Trainer service."""

from decimal import Decimal
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session
from gym_backend.models import Trainer, User, UserRole
from gym_backend.services.base import BaseService
from gym_backend.utils.logger import logger


class TrainerService(BaseService[Trainer]):
    """Service for managing trainer profiles."""

    def __init__(self):
        """Initialize trainer service."""
        super().__init__(Trainer)

    def _validate(self, db: Session, data: Dict[str, Any], trainer_id: Optional[int] = None) -> None:
        """
        Enforce trainer invariants.

        - a user can back at most one trainer, and must have the TRAINER role
        - trainer emails are unique
        - a linked user's gym must match the trainer's gym
        """
        user_id = data.get("user_id")
        if user_id is not None:
            existing = db.query(Trainer).filter(Trainer.user_id == user_id).first()
            if existing and existing.id != trainer_id:
                raise ValueError(f"A trainer with user_id {user_id} already exists")

            user = db.query(User).filter(User.id == user_id).first()
            if not user:
                raise ValueError(f"User not found with ID: {user_id}")
            if user.role != UserRole.TRAINER:
                raise ValueError(
                    f"User with ID {user_id} is not a TRAINER. Current role: {user.role.value}"
                )

            gym_id = data.get("gym_id")
            if user.gym_id is not None and gym_id is not None and user.gym_id != gym_id:
                raise ValueError(
                    f"User belongs to gym {user.gym_id} but trainer is being saved for gym {gym_id}"
                )
            if gym_id is None and user.gym_id is not None:
                data["gym_id"] = user.gym_id

        email = data.get("email")
        if email:
            existing = (
                db.query(Trainer).filter(Trainer.email == email.strip().lower()).first()
            )
            if existing and existing.id != trainer_id:
                raise ValueError(f"Email '{email}' already exists for another trainer")

    def create_trainer(self, db: Session, data: Dict[str, Any]) -> Trainer:
        """
        Create a trainer.

        Raises:
            ValueError: If validation fails
        """
        data = dict(data)
        self._validate(db, data)
        logger.info(f"Creating trainer: {data.get('first_name')} {data.get('last_name')}")
        return self.create(db, data)

    def update_trainer(self, db: Session, trainer: Trainer, data: Dict[str, Any]) -> Trainer:
        """
        Update a trainer.

        Raises:
            ValueError: If validation fails
        """
        merged = dict(data)
        merged.setdefault("gym_id", trainer.gym_id)
        self._validate(db, merged, trainer_id=trainer.id)
        if "gym_id" not in data and merged["gym_id"] != trainer.gym_id:
            data = {**data, "gym_id": merged["gym_id"]}
        return self.update(db, trainer, data)

    def list_trainers(
        self,
        db: Session,
        gym_id: Optional[int] = None,
        active_only: bool = False,
        specialization: Optional[str] = None,
    ) -> List[Trainer]:
        query = db.query(Trainer)
        if gym_id is not None:
            query = query.filter(Trainer.gym_id == gym_id)
        if active_only:
            query = query.filter(Trainer.is_active == True)
        if specialization:
            query = query.filter(Trainer.specialization.ilike(f"%{specialization.strip()}%"))
        return query.order_by(Trainer.last_name, Trainer.first_name).all()

    def get_top_rated(
        self,
        db: Session,
        min_rating: Decimal,
        gym_id: Optional[int] = None,
    ) -> List[Trainer]:
        query = db.query(Trainer).filter(
            Trainer.is_active == True, Trainer.rating >= min_rating
        )
        if gym_id is not None:
            query = query.filter(Trainer.gym_id == gym_id)
        return query.order_by(Trainer.rating.desc()).all()

    def add_rating(self, db: Session, trainer: Trainer, rating: Decimal) -> Trainer:
        """Fold a new 0-5 rating into the trainer's running average."""
        if rating < 0 or rating > 5:
            raise ValueError("Rating must be between 0 and 5")
        count = trainer.total_ratings or 0
        current = Decimal(trainer.rating or 0)
        new_average = (current * count + Decimal(rating)) / (count + 1)
        return self.update(
            db,
            trainer,
            {"rating": new_average.quantize(Decimal("0.01")), "total_ratings": count + 1},
        )
