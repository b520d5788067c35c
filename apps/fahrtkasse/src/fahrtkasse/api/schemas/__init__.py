"""API request and response schemas."""

from fahrtkasse.api.schemas.payments import (
    PaymentsStateResponse,
    PaymentsSummaryResponse,
    ReplacePaymentsStateRequest,
)

__all__ = [
    "PaymentsStateResponse",
    "PaymentsSummaryResponse",
    "ReplacePaymentsStateRequest",
]
