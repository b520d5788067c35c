"""Roster entries and roster-wide aggregate computations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from fahrtkasse.domain.money import ZERO
from fahrtkasse.domain.payment_state import ParticipantRecord
from fahrtkasse.domain.payment_status import PaymentStatus, classify, remaining

MAX_NAME_LENGTH = 120


@dataclass(frozen=True, slots=True)
class ParticipantEntry:
    """One participant of the roster with the amount already paid."""

    id: int
    name: str = ""
    paid_amount: Decimal = ZERO

    @property
    def is_active(self) -> bool:
        return self.name.strip() != ""


@dataclass(frozen=True, slots=True)
class ParticipantView:
    """Participant projection including derived balance and status."""

    id: int
    name: str
    paid_amount: Decimal
    remaining_amount: Decimal
    status: PaymentStatus


@dataclass(frozen=True, slots=True)
class RosterTotals:
    """Aggregated roster values for the current shared amount."""

    active_count: int
    total_paid: Decimal
    expected_total: Decimal
    pending_amount: Decimal


def describe_participant(
    participant: ParticipantEntry, shared_amount: Decimal
) -> ParticipantView:
    """Build the derived view of one participant."""

    return ParticipantView(
        id=participant.id,
        name=participant.name,
        paid_amount=participant.paid_amount,
        remaining_amount=remaining(shared_amount, participant.paid_amount),
        status=classify(shared_amount, participant.paid_amount),
    )


def compute_roster_totals(
    participants: Iterable[ParticipantEntry], shared_amount: Decimal
) -> RosterTotals:
    """Aggregate roster totals.

    Only named participants count as active, but every participant's
    payment is included in ``total_paid``.
    """

    active_count = 0
    total_paid = ZERO
    for participant in participants:
        if participant.is_active:
            active_count += 1
        total_paid += participant.paid_amount

    expected_total = shared_amount * active_count
    return RosterTotals(
        active_count=active_count,
        total_paid=total_paid,
        expected_total=expected_total,
        pending_amount=expected_total - total_paid,
    )


def entries_from_records(
    records: Iterable[ParticipantRecord],
) -> list[ParticipantEntry]:
    """Turn persisted records into roster entries, ids assigned by position."""

    return [
        ParticipantEntry(
            id=position,
            name=record.name,
            paid_amount=record.paid_amount,
        )
        for position, record in enumerate(records)
    ]
