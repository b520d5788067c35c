"""Participant and payment persistence operations."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from fahrtkasse.db.models.participant import Participant
from fahrtkasse.db.models.payment import Payment


class PaymentStateRepository:
    """Repository for the full-replace payment state."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def delete_all(self) -> None:
        # Payments first because of the participant foreign key.
        self._session.execute(delete(Payment))
        self._session.execute(delete(Participant))

    def add(
        self,
        *,
        name: str,
        paid_amount: Decimal,
        total_amount_per_person: Decimal,
        position: int,
        saved_at: datetime,
    ) -> Payment:
        participant = Participant(name=name, created_at=saved_at, updated_at=saved_at)
        payment = Payment(
            participant=participant,
            position=position,
            paid_amount=paid_amount,
            total_amount_per_person=total_amount_per_person,
            created_at=saved_at,
            updated_at=saved_at,
        )
        self._session.add_all([participant, payment])
        self._session.flush()
        return payment

    def list_payments(self) -> list[Payment]:
        statement = (
            select(Payment)
            .options(joinedload(Payment.participant))
            .order_by(Payment.position.asc())
        )
        return list(self._session.scalars(statement).all())
