"""Localized labels used by tabular exports."""

from __future__ import annotations

from dataclasses import dataclass

from fahrtkasse.domain.payment_status import PaymentStatus


@dataclass(frozen=True, slots=True)
class ExportLabels:
    """Column headers, status words and summary label of one locale."""

    name: str
    paid_amount: str
    remaining_amount: str
    status: str
    amount_per_participant: str
    statuses: dict[PaymentStatus, str]

    def headers(self) -> list[str]:
        return [self.name, self.paid_amount, self.remaining_amount, self.status]

    def status_text(self, status: PaymentStatus) -> str:
        return self.statuses.get(status, "-")


GERMAN_LABELS = ExportLabels(
    name="Name",
    paid_amount="Gezahlter Betrag (€)",
    remaining_amount="Restbetrag (€)",
    status="Status",
    amount_per_participant="Gesamtbetrag pro Teilnehmer",
    statuses={
        PaymentStatus.NOT_PAID: "Nicht gezahlt",
        PaymentStatus.PAID: "✓ Vollständig gezahlt",
        PaymentStatus.PARTIAL: "Teilweise gezahlt",
        PaymentStatus.OVERPAID: "Überzahlung",
    },
)

ENGLISH_LABELS = ExportLabels(
    name="Name",
    paid_amount="Paid Amount",
    remaining_amount="Remaining Amount",
    status="Status",
    amount_per_participant="Amount per participant",
    statuses={
        PaymentStatus.NOT_PAID: "Not paid",
        PaymentStatus.PAID: "✓ Fully paid",
        PaymentStatus.PARTIAL: "Partially paid",
        PaymentStatus.OVERPAID: "Overpaid",
    },
)

LABELS_BY_LOCALE = {
    "de": GERMAN_LABELS,
    "en": ENGLISH_LABELS,
}


def get_labels(locale: str) -> ExportLabels:
    """Return labels for a locale, falling back to German."""

    return LABELS_BY_LOCALE.get(locale, GERMAN_LABELS)
