from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from fahrtkasse.application.payment_store import PaymentStore
from fahrtkasse.db.models.participant import Participant
from fahrtkasse.db.models.payment import Payment
from fahrtkasse.domain.errors import PersistenceError
from fahrtkasse.domain.payment_state import ParticipantRecord
from fahrtkasse.persistence.database_backend import DatabaseStateBackend


def _count(session_factory: sessionmaker[Session], model: type) -> int:
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(model)) or 0


def test_store_round_trip_through_database(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    store = PaymentStore(DatabaseStateBackend(sqlite_session_factory))
    store.load()
    store.add_participant("Anna", "50")
    store.add_participant("Bo")
    store.set_shared_amount("100")
    store.update_participant(1, paid_amount="100")

    reloaded = PaymentStore(DatabaseStateBackend(sqlite_session_factory))
    reloaded.load()

    assert reloaded.shared_amount == Decimal("100.00")
    entries = [(item.id, item.name, item.paid_amount) for item in reloaded.participants]
    assert entries == [
        (0, "Anna", Decimal("50.00")),
        (1, "Bo", Decimal("100.00")),
    ]
    assert reloaded.last_saved is not None
    assert reloaded.last_saved.tzinfo is not None
    assert reloaded.totals.pending_amount == Decimal("50.00")


def test_save_replaces_rows_in_one_transaction(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    backend = DatabaseStateBackend(sqlite_session_factory)
    backend.save(
        Decimal("10"),
        [
            ParticipantRecord(name="Anna", paid_amount=Decimal("1")),
            ParticipantRecord(name="Bo", paid_amount=Decimal("2")),
        ],
    )

    backend.save(
        Decimal("10"), [ParticipantRecord(name="Cleo", paid_amount=Decimal("3"))]
    )

    assert _count(sqlite_session_factory, Participant) == 1
    assert _count(sqlite_session_factory, Payment) == 1
    assert backend.load().participants == [
        ParticipantRecord(name="Cleo", paid_amount=Decimal("3.00"))
    ]


def test_empty_database_loads_empty_state(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    state = DatabaseStateBackend(sqlite_session_factory).load()

    assert state.shared_amount == Decimal("0.00")
    assert state.participants == []
    assert state.last_saved is None


def test_database_failure_becomes_persistence_error(
    sqlite_session_factory: sessionmaker[Session],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_commit(self: Session) -> None:
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    backend = DatabaseStateBackend(sqlite_session_factory)
    backend.save(
        Decimal("5"), [ParticipantRecord(name="Anna", paid_amount=Decimal("5"))]
    )
    monkeypatch.setattr(Session, "commit", broken_commit)

    with pytest.raises(PersistenceError) as exc_info:
        backend.save(Decimal("5"), [])

    monkeypatch.undo()
    assert exc_info.value.details == {"error_type": "OperationalError"}
    assert [item.name for item in backend.load().participants] == ["Anna"]


def test_participant_table_holds_only_roster_columns() -> None:
    assert set(Participant.__table__.columns.keys()) == {
        "id",
        "name",
        "created_at",
        "updated_at",
    }
