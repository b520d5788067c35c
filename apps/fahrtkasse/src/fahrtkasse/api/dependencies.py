"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from fahrtkasse.db.session import get_db_session
from fahrtkasse.repositories.payment_state_repository import PaymentStateRepository
from fahrtkasse.services.payment_state_service import PaymentStateService
from fahrtkasse.services.payment_summary_service import PaymentSummaryService


def get_payment_state_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> PaymentStateService:
    """Build payment state service with per-request session."""

    return PaymentStateService(
        repository=PaymentStateRepository(session),
        session=session,
    )


def get_payment_summary_service(
    state_service: Annotated[PaymentStateService, Depends(get_payment_state_service)],
) -> PaymentSummaryService:
    """Build summary service reading through the payment state service."""

    return PaymentSummaryService(state_reader=state_service)
