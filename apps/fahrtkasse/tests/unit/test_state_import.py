from __future__ import annotations

from decimal import Decimal

import pytest

from fahrtkasse.serialization.state_import import (
    ImportParseFailure,
    ParsedState,
    parse_state_document,
)


def _parsed(text: str) -> ParsedState:
    result = parse_state_document(text)
    assert isinstance(result, ParsedState)
    return result


def test_participants_are_read_with_positional_ids() -> None:
    parsed = _parsed(
        '{"totalAmount": 80.5, "participants": ['
        '{"id": 17, "name": "Anna", "paidAmount": 40.25},'
        '{"id": 3, "name": "Bo", "paidAmount": "0"}]}'
    )

    assert parsed.shared_amount == Decimal("80.50")
    assert [(item.id, item.name, item.paid_amount) for item in parsed.participants] == [
        (0, "Anna", Decimal("40.25")),
        (1, "Bo", Decimal("0.00")),
    ]


def test_legacy_persons_field_is_accepted() -> None:
    parsed = _parsed('{"persons": [{"name": "X", "paidAmount": "20"}]}')

    assert parsed.shared_amount is None
    assert parsed.participants[0].paid_amount == Decimal("20.00")


def test_missing_roster_becomes_empty() -> None:
    parsed = _parsed('{"totalAmount": null}')

    assert parsed.shared_amount is None
    assert parsed.participants == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('" 12.5 "', Decimal("12.50")),
        ("-3", Decimal("0.00")),
        ("true", Decimal("0.00")),
        ('"abc"', Decimal("0.00")),
        ('"Infinity"', Decimal("0.00")),
        ("null", Decimal("0.00")),
    ],
)
def test_amounts_are_coerced(raw: str, expected: Decimal) -> None:
    parsed = _parsed(f'{{"participants": [{{"name": "A", "paidAmount": {raw}}}]}}')

    assert parsed.participants[0].paid_amount == expected


def test_non_string_name_becomes_empty() -> None:
    parsed = _parsed('{"participants": [{"name": 42}, {}]}')

    assert [item.name for item in parsed.participants] == ["", ""]


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '"text"',
        '{"participants": {"name": "A"}}',
        '{"participants": ["A"]}',
        '{"participants": [{"name": "A"}, 3]}',
    ],
)
def test_malformed_documents_fail_as_a_whole(text: str) -> None:
    assert isinstance(parse_state_document(text), ImportParseFailure)


def test_empty_participants_take_precedence_over_legacy_field() -> None:
    parsed = _parsed('{"participants": [], "persons": [{"name": "Old"}]}')

    assert parsed.participants == []


def test_null_participants_fall_back_to_legacy_field() -> None:
    parsed = _parsed('{"participants": null, "persons": [{"name": "Old"}]}')

    assert [item.name for item in parsed.participants] == ["Old"]


def test_names_are_trimmed() -> None:
    parsed = _parsed('{"participants": [{"name": "  Anna "}]}')

    assert parsed.participants[0].name == "Anna"


def test_amount_above_storable_maximum_becomes_zero() -> None:
    parsed = _parsed(
        '{"totalAmount": 10000000000, '
        '"participants": [{"name": "A", "paidAmount": "9999999999.99"}]}'
    )

    assert parsed.shared_amount == Decimal("0.00")
    assert parsed.participants[0].paid_amount == Decimal("9999999999.99")


@pytest.mark.parametrize(
    "text",
    [
        '{"participants": {}}',
        '{"participants": ""}',
        '{"participants": 0}',
        '{"participants": [{"name": "' + "A" * 121 + '"}]}',
        '{"totalAmount": 1' + "0" * 5000 + ', "participants": []}',
        '{"participants": ' + "[" * 100000 + "]" * 100000 + "}",
    ],
    ids=[
        "object-roster",
        "string-roster",
        "number-roster",
        "name-too-long",
        "integer-too-long",
        "nested-too-deep",
    ],
)
def test_unusable_documents_fail_without_raising(text: str) -> None:
    assert isinstance(parse_state_document(text), ImportParseFailure)
