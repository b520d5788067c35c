"""Payment status rules derived from amount owed and amount paid."""

from __future__ import annotations

import enum
from decimal import Decimal


class PaymentStatus(enum.StrEnum):
    """Derived status of one participant against the shared amount."""

    NOT_PAID = "not-paid"
    PAID = "paid"
    PARTIAL = "partial"
    OVERPAID = "overpaid"

    @property
    def color(self) -> str:
        """Display hint used by summary payloads."""

        return _STATUS_COLORS[self]


_STATUS_COLORS = {
    PaymentStatus.NOT_PAID: "warning",
    PaymentStatus.PAID: "success",
    PaymentStatus.PARTIAL: "warning",
    PaymentStatus.OVERPAID: "error",
}


def remaining(owed: Decimal, paid: Decimal) -> Decimal:
    """Return what is still owed; negative values mean overpayment."""

    return owed - paid


def classify(owed: Decimal, paid: Decimal) -> PaymentStatus:
    """Classify a participant payment.

    A zero payment is always ``not-paid``, even when nothing is owed.
    """

    if paid == 0:
        return PaymentStatus.NOT_PAID
    balance = remaining(owed, paid)
    if balance == 0:
        return PaymentStatus.PAID
    if balance > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.OVERPAID
