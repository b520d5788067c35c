"""In-memory owner of the payment state with persist-after-every-mutation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

from fahrtkasse.domain.errors import (
    InvalidRequestError,
    PersistenceError,
    compose_error_message,
)
from fahrtkasse.domain.money import (
    MAX_AMOUNT,
    ZERO,
    format_money,
    is_storable_amount,
    parse_amount,
)
from fahrtkasse.domain.payment_state import ParticipantRecord
from fahrtkasse.domain.payment_status import PaymentStatus, classify, remaining
from fahrtkasse.domain.roster import (
    MAX_NAME_LENGTH,
    ParticipantEntry,
    ParticipantView,
    RosterTotals,
    compute_roster_totals,
    describe_participant,
    entries_from_records,
)
from fahrtkasse.persistence.contract import PaymentStateBackend
from fahrtkasse.serialization.labels import GERMAN_LABELS, ExportLabels
from fahrtkasse.serialization.state_export import export_csv, export_json
from fahrtkasse.serialization.state_import import (
    ImportParseFailure,
    parse_state_document,
)

logger = logging.getLogger(__name__)

SAVE_ERROR_MESSAGE = "Fehler beim Speichern der Daten"
LOAD_ERROR_MESSAGE = "Fehler beim Laden der Daten"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _validated_amount(value: object, field_name: str) -> Decimal:
    amount = parse_amount(value)
    if amount is None or not is_storable_amount(amount):
        raise InvalidRequestError(
            message=compose_error_message(
                cause=(
                    f"{field_name} must be a finite number between 0 and "
                    f"{format_money(MAX_AMOUNT)}."
                ),
                action="Provide an amount within the allowed range.",
            ),
            details={"field": field_name, "value": str(value)},
        )
    return amount


def _validated_name(value: str) -> str:
    name = value.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidRequestError(
            message=compose_error_message(
                cause=f"name must have at most {MAX_NAME_LENGTH} characters.",
                action="Shorten the participant name.",
            ),
            details={"field": "name", "length": len(name)},
        )
    return name


class PaymentStore:
    """Holds the shared amount and roster and persists every change.

    Each mutating operation replaces the whole persisted state through the
    backend before returning. When persistence fails the in-memory change
    is kept, ``error`` is set and the ``PersistenceError`` is re-raised.
    """

    def __init__(
        self,
        backend: PaymentStateBackend,
        *,
        labels: ExportLabels = GERMAN_LABELS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._backend = backend
        self._labels = labels
        self._clock = clock
        self._shared_amount = ZERO
        self._participants: list[ParticipantEntry] = []
        self._next_id = 0
        self.last_saved: datetime | None = None
        self.is_saving = False
        self.error: str | None = None

    @property
    def shared_amount(self) -> Decimal:
        return self._shared_amount

    @property
    def participants(self) -> list[ParticipantEntry]:
        return list(self._participants)

    @property
    def totals(self) -> RosterTotals:
        return compute_roster_totals(self._participants, self._shared_amount)

    def participant_remaining(self, participant_id: int) -> Decimal:
        participant = self._find(participant_id)
        if participant is None:
            return ZERO
        return remaining(self._shared_amount, participant.paid_amount)

    def participant_status(self, participant_id: int) -> PaymentStatus:
        participant = self._find(participant_id)
        if participant is None:
            return PaymentStatus.NOT_PAID
        return classify(self._shared_amount, participant.paid_amount)

    def participant_view(self, participant_id: int) -> ParticipantView | None:
        participant = self._find(participant_id)
        if participant is None:
            return None
        return describe_participant(participant, self._shared_amount)

    def participant_views(self) -> list[ParticipantView]:
        return [
            describe_participant(participant, self._shared_amount)
            for participant in self._participants
        ]

    def load(self) -> None:
        """Hydrate the store from the backend, assigning ids by position."""

        self.error = None
        try:
            state = self._backend.load()
        except PersistenceError:
            self.error = LOAD_ERROR_MESSAGE
            logger.exception("payment_state_load_failed")
            raise

        self._replace_roster(entries_from_records(state.participants))
        self._shared_amount = state.shared_amount
        self.last_saved = state.last_saved
        logger.info(
            "payment_state_loaded",
            extra={"participants": len(self._participants)},
        )

    def save(self) -> datetime:
        """Persist the complete state, replacing whatever was stored."""

        self.is_saving = True
        self.error = None
        try:
            saved_at = self._backend.save(
                self._shared_amount,
                [
                    ParticipantRecord(name=item.name, paid_amount=item.paid_amount)
                    for item in self._participants
                ],
            )
        except PersistenceError:
            self.error = SAVE_ERROR_MESSAGE
            logger.exception("payment_state_save_failed")
            raise
        finally:
            self.is_saving = False

        self.last_saved = saved_at
        return saved_at

    def set_shared_amount(self, amount: object) -> None:
        self._shared_amount = _validated_amount(amount, "sharedAmount")
        self.save()

    def add_participant(
        self, name: str = "", paid_amount: object = ZERO
    ) -> ParticipantEntry:
        validated_name = _validated_name(name)
        validated_paid = _validated_amount(paid_amount, "paidAmount")
        highest_id = max((item.id for item in self._participants), default=-1)
        participant = ParticipantEntry(
            id=max(highest_id + 1, self._next_id),
            name=validated_name,
            paid_amount=validated_paid,
        )
        self._next_id = participant.id + 1
        self._participants.append(participant)
        self.save()
        return participant

    def remove_participant(self, participant_id: int) -> None:
        self._participants = [
            item for item in self._participants if item.id != participant_id
        ]
        self.save()

    def update_participant(
        self,
        participant_id: int,
        *,
        name: str | None = None,
        paid_amount: object | None = None,
    ) -> ParticipantEntry | None:
        """Overwrite the provided fields of one participant, if it exists."""

        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = _validated_name(name)
        if paid_amount is not None:
            changes["paid_amount"] = _validated_amount(paid_amount, "paidAmount")

        updated: ParticipantEntry | None = None
        for index, item in enumerate(self._participants):
            if item.id == participant_id:
                updated = replace(item, **changes)
                self._participants[index] = updated
                break
        self.save()
        return updated

    def export_json(self) -> str:
        return export_json(self._shared_amount, self._participants, self._clock())

    def export_csv(self) -> str:
        return export_csv(self._shared_amount, self._participants, self._labels)

    def import_json(self, text: str) -> bool:
        """Replace the state from a JSON backup.

        Returns False for malformed documents (nothing changes) and for a
        failed save after the replacement (``error`` is set).
        """

        parsed = parse_state_document(text)
        if isinstance(parsed, ImportParseFailure):
            logger.warning(
                "payment_state_import_rejected",
                extra={"reason": parsed.reason},
            )
            return False

        if parsed.shared_amount is not None:
            self._shared_amount = parsed.shared_amount
        self._replace_roster(parsed.participants)
        try:
            self.save()
        except PersistenceError:
            return False
        logger.info(
            "payment_state_imported",
            extra={"participants": len(self._participants)},
        )
        return True

    def _replace_roster(self, participants: list[ParticipantEntry]) -> None:
        self._participants = list(participants)
        self._next_id = len(self._participants)

    def _find(self, participant_id: int) -> ParticipantEntry | None:
        return next(
            (item for item in self._participants if item.id == participant_id),
            None,
        )
