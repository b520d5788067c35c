"""Full payment state exchanged between the store and its backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from fahrtkasse.domain.money import ZERO


@dataclass(frozen=True, slots=True)
class ParticipantRecord:
    """Persisted participant data; ids are not part of the persisted state."""

    name: str
    paid_amount: Decimal


@dataclass(frozen=True, slots=True)
class PaymentState:
    """Complete roster plus shared amount as stored by a backend."""

    shared_amount: Decimal = ZERO
    participants: list[ParticipantRecord] = field(default_factory=list)
    last_saved: datetime | None = None

    @classmethod
    def empty(cls) -> PaymentState:
        return cls()


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps read back from storage."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
