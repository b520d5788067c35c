"""Remote backend reaching the transactional store through the REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from fahrtkasse.domain.errors import PersistenceError, compose_error_message
from fahrtkasse.domain.payment_state import ParticipantRecord, PaymentState
from fahrtkasse.persistence.documents import StateDocument, build_state_document

logger = logging.getLogger(__name__)

PAYMENTS_PATH = "/v1/payments"


def build_api_error(response: httpx.Response) -> str:
    """Describe a failed API response using the contract error payload."""

    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return f"API request failed with status {response.status_code}: {text}"
        return f"API request failed with status {response.status_code}."

    if isinstance(payload, Mapping):
        error_code = payload.get("code")
        error_message = payload.get("message")
        details = payload.get("details")
        if isinstance(error_code, str) and isinstance(error_message, str):
            if details is None:
                return f"API error {error_code}: {error_message}"
            return f"API error {error_code}: {error_message} | details={details}"

    return f"API request failed with status {response.status_code}: {payload}"


class HttpStateBackend:
    """Store backend calling ``GET/POST /v1/payments``."""

    def __init__(
        self,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None and timeout_seconds <= 0:
            raise ValueError("API timeout must be greater than zero.")
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )

    def save(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> datetime:
        document = build_state_document(shared_amount, participants)
        payload = document.model_dump(
            mode="json", by_alias=True, exclude={"last_saved"}
        )
        state = self._request("POST", json_body=payload)
        if state.last_saved is None:
            raise PersistenceError(
                message=compose_error_message(
                    cause="The API did not return a save timestamp.",
                    action="Check the API version and save again.",
                )
            )
        return state.last_saved

    def load(self) -> PaymentState:
        return self._request("GET")

    def close(self) -> None:
        self._client.close()

    def _request(
        self, method: str, *, json_body: dict[str, Any] | None = None
    ) -> PaymentState:
        try:
            response = self._client.request(method, PAYMENTS_PATH, json=json_body)
        except httpx.HTTPError as exc:
            logger.error(
                "payment_api_unreachable",
                extra={"method": method, "error": str(exc)},
            )
            raise PersistenceError(
                message=compose_error_message(
                    cause="The payments API could not be reached.",
                    action="Check API_BASE_URL and that the API is running.",
                ),
                details={"error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            error_message = build_api_error(response)
            logger.error(
                "payment_api_request_failed",
                extra={"method": method, "status_code": response.status_code},
            )
            raise PersistenceError(
                message=error_message,
                details={"status_code": response.status_code},
            )

        try:
            return StateDocument.model_validate_json(response.content).to_state()
        except ValidationError as exc:
            raise PersistenceError(
                message=compose_error_message(
                    cause="The payments API returned an unexpected payload.",
                    action="Check that API_BASE_URL points to a fahrtkasse API.",
                ),
                details={"errors": exc.error_count()},
            ) from exc
