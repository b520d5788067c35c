"""Backend contract shared by every payment state storage."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from fahrtkasse.domain.payment_state import ParticipantRecord, PaymentState


class PaymentStateBackend(Protocol):
    """Full-state save/load contract.

    ``save`` always replaces everything stored before and returns the save
    timestamp. ``load`` returns an empty state when nothing was saved yet.
    """

    def save(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> datetime: ...

    def load(self) -> PaymentState: ...
