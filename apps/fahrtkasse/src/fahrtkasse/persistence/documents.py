"""Serialized state document shared by the local blob and the REST payloads."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fahrtkasse.domain.errors import PersistenceError, compose_error_message
from fahrtkasse.domain.money import MAX_AMOUNT, ZERO, quantize_money
from fahrtkasse.domain.payment_state import (
    ParticipantRecord,
    PaymentState,
    ensure_utc,
)


class ParticipantDocument(BaseModel):
    """Participant entry inside a state document."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    paid_amount: Decimal = Field(
        default=ZERO, ge=0, le=MAX_AMOUNT, alias="paidAmount"
    )


class StateDocument(BaseModel):
    """``{totalAmount, participants, lastSaved}`` document."""

    model_config = ConfigDict(populate_by_name=True)

    shared_amount: Decimal = Field(
        default=ZERO, ge=0, le=MAX_AMOUNT, alias="totalAmount"
    )
    participants: list[ParticipantDocument] = Field(default_factory=list)
    last_saved: datetime | None = Field(default=None, alias="lastSaved")

    @classmethod
    def from_records(
        cls,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
        last_saved: datetime | None = None,
    ) -> StateDocument:
        return cls(
            shared_amount=quantize_money(shared_amount),
            participants=[
                ParticipantDocument(
                    name=record.name,
                    paid_amount=quantize_money(record.paid_amount),
                )
                for record in participants
            ],
            last_saved=last_saved,
        )

    def to_state(self) -> PaymentState:
        return PaymentState(
            shared_amount=quantize_money(self.shared_amount),
            participants=[
                ParticipantRecord(
                    name=item.name,
                    paid_amount=quantize_money(item.paid_amount),
                )
                for item in self.participants
            ],
            last_saved=ensure_utc(self.last_saved) if self.last_saved else None,
        )


def build_state_document(
    shared_amount: Decimal,
    participants: Sequence[ParticipantRecord],
    last_saved: datetime | None = None,
) -> StateDocument:
    """Build a document to save, rejecting values the storage cannot hold."""

    try:
        return StateDocument.from_records(shared_amount, participants, last_saved)
    except ValidationError as exc:
        raise PersistenceError(
            message=compose_error_message(
                cause="The payment state contains values that cannot be stored.",
                action="Correct the out-of-range amounts and save again.",
            ),
            details={"errors": exc.error_count()},
        ) from exc
