"""Business service projecting roster totals over the persisted state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from fahrtkasse.domain.payment_state import PaymentState
from fahrtkasse.domain.roster import (
    ParticipantEntry,
    ParticipantView,
    RosterTotals,
    compute_roster_totals,
    describe_participant,
    entries_from_records,
)


class PaymentStateReaderProtocol(Protocol):
    """Read side of the payment state consumed by the summary."""

    def get_state(self) -> PaymentState: ...


@dataclass(frozen=True, slots=True)
class PaymentSummaryProjection:
    """Roster values used by the summary and export endpoints."""

    shared_amount: Decimal
    participants: list[ParticipantEntry]
    views: list[ParticipantView]
    totals: RosterTotals
    last_saved: datetime | None


class PaymentSummaryService:
    """Computes derived statuses and roster totals for the stored state."""

    def __init__(self, *, state_reader: PaymentStateReaderProtocol) -> None:
        self._state_reader = state_reader

    def get_summary(self) -> PaymentSummaryProjection:
        state = self._state_reader.get_state()
        participants = entries_from_records(state.participants)
        return PaymentSummaryProjection(
            shared_amount=state.shared_amount,
            participants=participants,
            views=[
                describe_participant(participant, state.shared_amount)
                for participant in participants
            ],
            totals=compute_roster_totals(participants, state.shared_amount),
            last_saved=state.last_saved,
        )
