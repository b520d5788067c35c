"""Relational backend replacing the payment state inside one transaction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fahrtkasse.domain.errors import PersistenceError, compose_error_message
from fahrtkasse.domain.payment_state import ParticipantRecord, PaymentState
from fahrtkasse.repositories.payment_state_repository import PaymentStateRepository
from fahrtkasse.services.payment_state_service import PaymentStateService

logger = logging.getLogger(__name__)


class DatabaseStateBackend:
    """Store backend talking to the database directly through SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def save(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> datetime:
        try:
            with self._session_factory() as session:
                state = self._service(session).replace_state(
                    shared_amount, participants
                )
        except SQLAlchemyError as exc:
            logger.error("database_state_save_failed", extra={"error": str(exc)})
            raise PersistenceError(
                message=compose_error_message(
                    cause="The payment state transaction failed.",
                    action="Check the database connection and save again.",
                ),
                details={"error_type": type(exc).__name__},
            ) from exc

        return cast(datetime, state.last_saved)

    def load(self) -> PaymentState:
        try:
            with self._session_factory() as session:
                return self._service(session).get_state()
        except SQLAlchemyError as exc:
            logger.error("database_state_load_failed", extra={"error": str(exc)})
            raise PersistenceError(
                message=compose_error_message(
                    cause="The payment state could not be read from the database.",
                    action="Check the database connection and reload.",
                ),
                details={"error_type": type(exc).__name__},
            ) from exc

    @staticmethod
    def _service(session: Session) -> PaymentStateService:
        return PaymentStateService(
            repository=PaymentStateRepository(session),
            session=session,
        )
