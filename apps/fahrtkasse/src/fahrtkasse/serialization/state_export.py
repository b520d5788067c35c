"""Read-only export snapshots of the payment state."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from fahrtkasse.domain.money import quantize_money
from fahrtkasse.domain.payment_status import PaymentStatus
from fahrtkasse.domain.roster import ParticipantEntry, describe_participant
from fahrtkasse.serialization.labels import GERMAN_LABELS, ExportLabels

EXPORT_FORMAT_VERSION = "2.0"


class ExportedParticipant(BaseModel):
    """Participant line of the JSON export."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    paid_amount: float = Field(alias="paidAmount")
    remaining_amount: float = Field(alias="remainingAmount")
    status: PaymentStatus


class ExportDocument(BaseModel):
    """Full JSON export snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    total_amount: float = Field(alias="totalAmount")
    participants: list[ExportedParticipant]
    exported_at: datetime = Field(alias="exportedAt")
    version: str = EXPORT_FORMAT_VERSION


def build_export_document(
    shared_amount: Decimal,
    participants: Sequence[ParticipantEntry],
    exported_at: datetime,
) -> ExportDocument:
    """Project the state into the export document including derived fields."""

    views = [describe_participant(item, shared_amount) for item in participants]
    return ExportDocument(
        total_amount=float(quantize_money(shared_amount)),
        participants=[
            ExportedParticipant(
                name=view.name,
                paid_amount=float(quantize_money(view.paid_amount)),
                remaining_amount=float(quantize_money(view.remaining_amount)),
                status=view.status,
            )
            for view in views
        ],
        exported_at=exported_at,
    )


def export_json(
    shared_amount: Decimal,
    participants: Sequence[ParticipantEntry],
    exported_at: datetime,
) -> str:
    """Render the JSON export document."""

    document = build_export_document(shared_amount, participants, exported_at)
    return document.model_dump_json(by_alias=True, indent=2)


def export_csv(
    shared_amount: Decimal,
    participants: Sequence[ParticipantEntry],
    labels: ExportLabels = GERMAN_LABELS,
) -> str:
    """Render the CSV export with localized headers and a summary line.

    Text fields are quoted, amounts are written as plain numbers with two
    decimal places.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(labels.headers())
    for participant in participants:
        view = describe_participant(participant, shared_amount)
        writer.writerow(
            [
                view.name,
                quantize_money(view.paid_amount),
                quantize_money(view.remaining_amount),
                labels.status_text(view.status),
            ]
        )
    writer.writerow([])
    writer.writerow([labels.amount_per_participant, quantize_money(shared_amount)])
    return buffer.getvalue()
