"""Payment model."""

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Enum,
    Text,
    Index,
    Integer,
    ForeignKey,
    CheckConstraint,
    Numeric,
)
from sqlalchemy.orm import relationship
from gym_backend.models.base import BaseModel
from gym_backend.models.enums import PaymentMethod, PaymentStatus


class Payment(BaseModel):
    """
    Payment received from (or owed by) a member.

    Attributes:
        amount: Payment amount, must be positive
        payment_method: How the payment was made
        status: Payment status
        payment_date: When the payment was recorded
        due_date: When the payment is due
    """

    __tablename__ = "payments"

    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True)
    membership_id = Column(Integer, ForeignKey("member_memberships.id"), nullable=True)
    membership_plan_id = Column(Integer, ForeignKey("membership_plans.id"), nullable=True)

    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    transaction_id = Column(String(100), nullable=True)
    status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    payment_date = Column(DateTime, nullable=True)
    due_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    member = relationship("Member", back_populates="payments")
    gym = relationship("Gym")
    membership = relationship("MemberMembership")
    membership_plan = relationship("MembershipPlan")

    __table_args__ = (
        Index("idx_payment_gym_date", "gym_id", "payment_date"),
        Index("idx_payment_status_due", "status", "due_date"),
        CheckConstraint("amount > 0", name="check_payment_amount_positive"),
    )

    def __repr__(self):
        return (
            f"<Payment(id={self.id}, member_id={self.member_id}, amount={self.amount}, "
            f"status='{self.status.value if self.status else None}')>"
        )
