"""Payments routes."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Response

from fahrtkasse.api.dependencies import (
    get_payment_state_service,
    get_payment_summary_service,
)
from fahrtkasse.api.schemas.payments import (
    PaymentsStateResponse,
    PaymentsSummaryResponse,
    ReplacePaymentsStateRequest,
)
from fahrtkasse.core.settings import Settings, get_settings
from fahrtkasse.serialization.labels import get_labels
from fahrtkasse.serialization.state_export import export_csv, export_json
from fahrtkasse.services.payment_state_service import PaymentStateService
from fahrtkasse.services.payment_summary_service import PaymentSummaryService

router = APIRouter(prefix="/payments", tags=["Payments"])

EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
}


@router.get("", response_model=PaymentsStateResponse)
def get_payments_state(
    service: Annotated[PaymentStateService, Depends(get_payment_state_service)],
) -> PaymentsStateResponse:
    """Return the complete persisted payment state."""

    return PaymentsStateResponse.from_state(service.get_state())


@router.post(
    "",
    response_model=PaymentsStateResponse,
    responses={
        400: {"description": "Ungueltiger Zahlungsstand"},
        500: {"description": "Speichern fehlgeschlagen"},
    },
)
def replace_payments_state(
    payload: ReplacePaymentsStateRequest,
    service: Annotated[PaymentStateService, Depends(get_payment_state_service)],
) -> PaymentsStateResponse:
    """Replace every stored participant and payment in one transaction."""

    state = service.replace_state(payload.total_amount, payload.to_records())
    return PaymentsStateResponse.from_state(state)


@router.get("/summary", response_model=PaymentsSummaryResponse)
def get_payments_summary(
    service: Annotated[PaymentSummaryService, Depends(get_payment_summary_service)],
) -> PaymentsSummaryResponse:
    """Return roster totals and derived per-participant statuses."""

    summary = service.get_summary()
    return PaymentsSummaryResponse.from_projection(
        shared_amount=summary.shared_amount,
        totals=summary.totals,
        views=summary.views,
        last_saved=summary.last_saved,
    )


@router.get("/export")
def export_payments(
    service: Annotated[PaymentSummaryService, Depends(get_payment_summary_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    format: Annotated[Literal["json", "csv"], Query()] = "json",
) -> Response:
    """Download a read-only JSON or CSV snapshot of the payment state."""

    summary = service.get_summary()
    exported_at = datetime.now(UTC)
    if format == "csv":
        content = export_csv(
            summary.shared_amount,
            summary.participants,
            get_labels(settings.export_locale),
        )
    else:
        content = export_json(summary.shared_amount, summary.participants, exported_at)

    filename = f"payments-{exported_at.date().isoformat()}.{format}"
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
