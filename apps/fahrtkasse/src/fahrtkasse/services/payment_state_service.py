"""Business service for full-replace payment state persistence."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from decimal import Decimal
from typing import Protocol

from fahrtkasse.db.models.payment import Payment
from fahrtkasse.domain.errors import InvalidRequestError, compose_error_message
from fahrtkasse.domain.money import is_storable_amount, quantize_money
from fahrtkasse.domain.payment_state import (
    ParticipantRecord,
    PaymentState,
    ensure_utc,
)

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class PaymentStateRepositoryProtocol(Protocol):
    """Payment state repository contract consumed by service."""

    def delete_all(self) -> None: ...

    def add(
        self,
        *,
        name: str,
        paid_amount: Decimal,
        total_amount_per_person: Decimal,
        position: int,
        saved_at: datetime,
    ) -> Payment: ...

    def list_payments(self) -> list[Payment]: ...


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PaymentStateService:
    """Reads and atomically replaces the persisted payment state."""

    def __init__(
        self,
        *,
        repository: PaymentStateRepositoryProtocol,
        session: SessionProtocol,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repository = repository
        self._session = session
        self._clock = clock

    def get_state(self) -> PaymentState:
        payments = self._repository.list_payments()
        if not payments:
            return PaymentState.empty()

        return PaymentState(
            shared_amount=quantize_money(payments[0].total_amount_per_person),
            participants=[
                ParticipantRecord(
                    name=payment.participant.name,
                    paid_amount=quantize_money(payment.paid_amount),
                )
                for payment in payments
            ],
            last_saved=max(ensure_utc(payment.updated_at) for payment in payments),
        )

    def replace_state(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> PaymentState:
        """Delete every stored participant and payment, then insert the new set."""

        self._validate(shared_amount, participants)
        shared_amount = quantize_money(shared_amount)
        saved_at = self._clock()

        try:
            self._repository.delete_all()
            created = [
                self._repository.add(
                    name=record.name,
                    paid_amount=quantize_money(record.paid_amount),
                    total_amount_per_person=shared_amount,
                    position=position,
                    saved_at=saved_at,
                )
                for position, record in enumerate(participants)
            ]
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        last_saved = (
            max(ensure_utc(payment.updated_at) for payment in created)
            if created
            else saved_at
        )
        logger.info(
            "payment_state_replaced",
            extra={
                "participants": len(created),
                "shared_amount": str(shared_amount),
                "last_saved": last_saved.isoformat(),
            },
        )
        return PaymentState(
            shared_amount=shared_amount,
            participants=[
                ParticipantRecord(
                    name=record.name,
                    paid_amount=quantize_money(record.paid_amount),
                )
                for record in participants
            ],
            last_saved=last_saved,
        )

    def _validate(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> None:
        if not shared_amount.is_finite() or not is_storable_amount(shared_amount):
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="totalAmount must be a valid non-negative number.",
                    action="Send a finite amount within the storable range.",
                ),
                details={"field": "totalAmount"},
            )
        for index, record in enumerate(participants):
            if not (
                record.paid_amount.is_finite()
                and is_storable_amount(record.paid_amount)
            ):
                raise InvalidRequestError(
                    message=compose_error_message(
                        cause=(
                            "Each participant's paidAmount must be a valid "
                            "non-negative number."
                        ),
                        action="Fix the paid amount and send the state again.",
                    ),
                    details={"field": f"participants[{index}].paidAmount"},
                )
