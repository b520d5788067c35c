from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from fahrtkasse.application.payment_store import PaymentStore
from fahrtkasse.domain.errors import InvalidRequestError
from fahrtkasse.domain.payment_status import PaymentStatus
from fahrtkasse.persistence.http_backend import HttpStateBackend


def test_store_persists_through_the_api(client: TestClient) -> None:
    store = PaymentStore(HttpStateBackend(client=client))
    store.load()

    store.set_shared_amount("100")
    anna = store.add_participant("Anna", "50")
    store.add_participant("Bo", "120")

    summary = client.get("/v1/payments/summary").json()
    assert summary["activeCount"] == 2
    assert summary["participants"][1]["status"] == "overpaid"
    assert store.last_saved is not None

    reloaded = PaymentStore(HttpStateBackend(client=client))
    reloaded.load()
    assert reloaded.shared_amount == Decimal("100.00")
    assert reloaded.participant_status(anna.id) is PaymentStatus.PARTIAL


def test_import_through_the_api_replaces_remote_state(client: TestClient) -> None:
    store = PaymentStore(HttpStateBackend(client=client))
    store.load()
    store.add_participant("Anna", "10")

    imported = store.import_json(
        '{"totalAmount": 40, "persons": [{"name": "X", "paidAmount": "20"}]}'
    )

    assert imported is True
    body = client.get("/v1/payments").json()
    assert body["totalAmount"] == "40.00"
    assert body["participants"] == [{"name": "X", "paidAmount": "20.00"}]
    assert body["lastSaved"] is not None


def test_names_stay_consistent_with_the_api(client: TestClient) -> None:
    store = PaymentStore(HttpStateBackend(client=client))
    store.load()
    store.add_participant("  Anna  ")

    with pytest.raises(InvalidRequestError):
        store.add_participant("A" * 121)

    reloaded = PaymentStore(HttpStateBackend(client=client))
    reloaded.load()
    assert [item.name for item in store.participants] == ["Anna"]
    assert [item.name for item in reloaded.participants] == ["Anna"]
    assert store.error is None


def test_amount_above_storable_maximum_never_reaches_the_api(
    client: TestClient,
) -> None:
    store = PaymentStore(HttpStateBackend(client=client))
    store.load()
    store.set_shared_amount("9999999999.99")

    with pytest.raises(InvalidRequestError):
        store.set_shared_amount("10000000000")

    assert store.shared_amount == Decimal("9999999999.99")
    assert client.get("/v1/payments").json()["participants"] == []
