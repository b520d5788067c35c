"""Pydantic schemas for payments endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints

from fahrtkasse.domain.money import MAX_AMOUNT, ZERO, format_money
from fahrtkasse.domain.payment_state import ParticipantRecord, PaymentState
from fahrtkasse.domain.payment_status import PaymentStatus
from fahrtkasse.domain.roster import MAX_NAME_LENGTH, ParticipantView, RosterTotals

MONEY_PATTERN = r"^-?[0-9]+\.[0-9]{2}$"
ParticipantName = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=MAX_NAME_LENGTH)
]


class ParticipantStateInput(BaseModel):
    """Participant entry of a full-state replacement."""

    model_config = ConfigDict(populate_by_name=True)

    name: ParticipantName = ""
    paid_amount: Decimal = Field(
        default=ZERO, ge=0, le=MAX_AMOUNT, alias="paidAmount"
    )


class ReplacePaymentsStateRequest(BaseModel):
    """Payload replacing the complete persisted payment state."""

    model_config = ConfigDict(populate_by_name=True)

    total_amount: Decimal = Field(
        ge=0,
        le=MAX_AMOUNT,
        validation_alias=AliasChoices("totalAmount", "total_amount"),
    )
    participants: list[ParticipantStateInput] = Field(
        validation_alias=AliasChoices("participants", "persons"),
    )

    def to_records(self) -> list[ParticipantRecord]:
        return [
            ParticipantRecord(name=item.name, paid_amount=item.paid_amount)
            for item in self.participants
        ]


class ParticipantStateResponse(BaseModel):
    """Persisted participant entry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    paid_amount: str = Field(pattern=MONEY_PATTERN, alias="paidAmount")


class PaymentsStateResponse(BaseModel):
    """Full persisted payment state."""

    model_config = ConfigDict(populate_by_name=True)

    total_amount: str = Field(pattern=MONEY_PATTERN, alias="totalAmount")
    participants: list[ParticipantStateResponse]
    last_saved: datetime | None = Field(alias="lastSaved")

    @classmethod
    def from_state(cls, state: PaymentState) -> PaymentsStateResponse:
        return cls(
            total_amount=format_money(state.shared_amount),
            participants=[
                ParticipantStateResponse(
                    name=item.name,
                    paid_amount=format_money(item.paid_amount),
                )
                for item in state.participants
            ],
            last_saved=state.last_saved,
        )


class ParticipantSummaryResponse(BaseModel):
    """Participant line with derived balance and status."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    paid_amount: str = Field(pattern=MONEY_PATTERN, alias="paidAmount")
    remaining_amount: str = Field(pattern=MONEY_PATTERN, alias="remainingAmount")
    status: PaymentStatus
    color: str

    @classmethod
    def from_view(cls, view: ParticipantView) -> ParticipantSummaryResponse:
        return cls(
            id=view.id,
            name=view.name,
            paid_amount=format_money(view.paid_amount),
            remaining_amount=format_money(view.remaining_amount),
            status=view.status,
            color=view.status.color,
        )


class PaymentsSummaryResponse(BaseModel):
    """Roster totals for the persisted state."""

    model_config = ConfigDict(populate_by_name=True)

    total_amount: str = Field(pattern=MONEY_PATTERN, alias="totalAmount")
    active_count: int = Field(ge=0, alias="activeCount")
    total_paid: str = Field(pattern=MONEY_PATTERN, alias="totalPaid")
    expected_total: str = Field(pattern=MONEY_PATTERN, alias="expectedTotal")
    pending_amount: str = Field(pattern=MONEY_PATTERN, alias="pendingAmount")
    participants: list[ParticipantSummaryResponse]
    last_saved: datetime | None = Field(alias="lastSaved")

    @classmethod
    def from_projection(
        cls,
        *,
        shared_amount: Decimal,
        totals: RosterTotals,
        views: list[ParticipantView],
        last_saved: datetime | None,
    ) -> PaymentsSummaryResponse:
        return cls(
            total_amount=format_money(shared_amount),
            active_count=totals.active_count,
            total_paid=format_money(totals.total_paid),
            expected_total=format_money(totals.expected_total),
            pending_amount=format_money(totals.pending_amount),
            participants=[ParticipantSummaryResponse.from_view(view) for view in views],
            last_saved=last_saved,
        )
