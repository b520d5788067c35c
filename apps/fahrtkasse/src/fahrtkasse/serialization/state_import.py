"""Tolerant parser for JSON backups, including the legacy ``persons`` layout.

Coercion rules:

* the text must be a JSON object, anything else fails, including
  documents too deeply nested or with integers too long to decode;
* ``totalAmount`` missing or ``null`` keeps the current shared amount,
  otherwise it is coerced like any amount;
* the roster is read from the first of ``participants`` and ``persons``
  that is present and not ``null``, otherwise it is empty; a roster that
  is not a list fails;
* every roster entry must be an object, otherwise the whole import fails;
* ``name`` is trimmed when it is a string and becomes ``""`` otherwise;
  a name longer than ``MAX_NAME_LENGTH`` fails;
* amounts accept numbers and numeric strings; booleans, missing,
  unparsable, non-finite, negative and above ``MAX_AMOUNT`` values
  become ``0``;
* ids present in the document are ignored, entries get their position.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from fahrtkasse.domain.money import coerce_money
from fahrtkasse.domain.roster import MAX_NAME_LENGTH, ParticipantEntry

ROSTER_FIELDS = ("participants", "persons")


@dataclass(frozen=True, slots=True)
class ParsedState:
    """Successfully parsed import document."""

    shared_amount: Decimal | None
    participants: list[ParticipantEntry]


@dataclass(frozen=True, slots=True)
class ImportParseFailure:
    """Import document rejected as a whole."""

    reason: str


def _read_roster(data: dict[str, Any]) -> list[Any] | None:
    for field_name in ROSTER_FIELDS:
        value = data.get(field_name)
        if value is not None:
            return value if isinstance(value, list) else None
    return []


def parse_state_document(text: str) -> ParsedState | ImportParseFailure:
    """Parse an exported JSON document without raising on malformed input."""

    try:
        data = json.loads(text, parse_float=Decimal)
    except (ValueError, TypeError, RecursionError) as exc:
        return ImportParseFailure(reason=f"Invalid JSON: {exc}")

    if not isinstance(data, dict):
        return ImportParseFailure(reason="Top-level JSON value must be an object.")

    raw_total = data.get("totalAmount")
    shared_amount = None if raw_total is None else coerce_money(raw_total)

    raw_participants = _read_roster(data)
    if raw_participants is None:
        return ImportParseFailure(reason="Participants must be a list.")

    participants: list[ParticipantEntry] = []
    for position, item in enumerate(raw_participants):
        if not isinstance(item, dict):
            return ImportParseFailure(
                reason=f"Participant at position {position} is not an object."
            )
        raw_name = item.get("name")
        name = raw_name.strip() if isinstance(raw_name, str) else ""
        if len(name) > MAX_NAME_LENGTH:
            return ImportParseFailure(
                reason=(
                    f"Participant at position {position} has a name longer "
                    f"than {MAX_NAME_LENGTH} characters."
                )
            )
        participants.append(
            ParticipantEntry(
                id=position,
                name=name,
                paid_amount=coerce_money(item.get("paidAmount")),
            )
        )

    return ParsedState(shared_amount=shared_amount, participants=participants)
