"""Payment ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fahrtkasse.db.base import Base
from fahrtkasse.db.models.participant import Participant


class Payment(Base):
    """Paid amount of one participant against the shared amount per person."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint(
            "paid_amount >= 0", name="ck_payments_paid_amount_non_negative"
        ),
        CheckConstraint(
            "total_amount_per_person >= 0",
            name="ck_payments_total_amount_per_person_non_negative",
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    participant_id: Mapped[UUID] = mapped_column(
        ForeignKey("participants.id"),
        nullable=False,
        unique=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_amount_per_person: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    participant: Mapped[Participant] = relationship(
        "Participant",
        back_populates="payment",
    )
