"""Local device storage backend keeping the state in a single JSON blob."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from fahrtkasse.domain.errors import PersistenceError, compose_error_message
from fahrtkasse.domain.payment_state import ParticipantRecord, PaymentState
from fahrtkasse.persistence.documents import StateDocument, build_state_document

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class LocalStateBackend:
    """Reads and writes ``<storage_dir>/<storage_key>.json``.

    Writes go through a temporary file in the same directory followed by
    ``os.replace`` so a reader never observes a half-written blob.
    """

    def __init__(
        self,
        storage_dir: Path,
        storage_key: str = "payment-state",
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._storage_dir = Path(storage_dir)
        self._storage_key = storage_key
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._storage_dir / f"{self._storage_key}.json"

    def save(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> datetime:
        saved_at = self._clock()
        document = build_state_document(shared_amount, participants, saved_at)
        try:
            self._write(document.model_dump_json(by_alias=True, indent=2))
        except OSError as exc:
            logger.error(
                "local_state_write_failed",
                extra={"path": str(self.path), "error": str(exc)},
            )
            raise PersistenceError(
                message=compose_error_message(
                    cause="The local payment state file could not be written.",
                    action="Check that the storage directory is writable.",
                ),
                details={"path": str(self.path)},
            ) from exc

        logger.debug(
            "local_state_saved",
            extra={"path": str(self.path), "participants": len(participants)},
        )
        return saved_at

    def load(self) -> PaymentState:
        try:
            content = self.path.read_bytes()
        except FileNotFoundError:
            return PaymentState.empty()
        except OSError as exc:
            raise PersistenceError(
                message=compose_error_message(
                    cause="The local payment state file could not be read.",
                    action="Check file permissions of the storage directory.",
                ),
                details={"path": str(self.path)},
            ) from exc

        try:
            document = StateDocument.model_validate_json(content)
        except ValidationError as exc:
            logger.warning(
                "local_state_malformed",
                extra={"path": str(self.path), "errors": exc.error_count()},
            )
            return PaymentState.empty()
        return document.to_state()

    def _write(self, content: str) -> None:
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            suffix=".tmp",
            prefix=f"{self._storage_key}-",
            dir=self._storage_dir,
            delete=False,
        ) as temp_file:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
            temp_name = temp_file.name
        try:
            os.replace(temp_name, self.path)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise
