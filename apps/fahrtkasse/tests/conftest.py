from __future__ import annotations

from collections.abc import Generator, Sequence
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fahrtkasse.api.app import create_app
from fahrtkasse.db.base import Base, import_orm_models
from fahrtkasse.db.session import create_session_factory, get_db_session
from fahrtkasse.domain.errors import PersistenceError
from fahrtkasse.domain.payment_state import ParticipantRecord, PaymentState

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=UTC)


class FakeBackend:
    """In-memory backend recording every full-state save."""

    def __init__(self, state: PaymentState | None = None) -> None:
        self.state = state or PaymentState.empty()
        self.saves: list[tuple[Decimal, list[ParticipantRecord]]] = []
        self.fail_on_save = False
        self.fail_on_load = False

    def save(
        self,
        shared_amount: Decimal,
        participants: Sequence[ParticipantRecord],
    ) -> datetime:
        if self.fail_on_save:
            raise PersistenceError(details={"backend": "fake"})
        self.saves.append((shared_amount, list(participants)))
        self.state = PaymentState(
            shared_amount=shared_amount,
            participants=list(participants),
            last_saved=FIXED_NOW,
        )
        return FIXED_NOW

    def load(self) -> PaymentState:
        if self.fail_on_load:
            raise PersistenceError(details={"backend": "fake"})
        return self.state


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield create_session_factory(engine)
    finally:
        Base.metadata.drop_all(engine)


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app) as test_client:
        yield test_client
