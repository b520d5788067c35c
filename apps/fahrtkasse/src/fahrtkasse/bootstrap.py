"""Composition root wiring settings, backend and store together."""

from __future__ import annotations

from fahrtkasse.application.payment_store import PaymentStore
from fahrtkasse.core.settings import Settings, get_settings
from fahrtkasse.db.session import get_session_factory
from fahrtkasse.persistence.contract import PaymentStateBackend
from fahrtkasse.persistence.database_backend import DatabaseStateBackend
from fahrtkasse.persistence.http_backend import HttpStateBackend
from fahrtkasse.persistence.local_backend import LocalStateBackend
from fahrtkasse.serialization.labels import get_labels


def build_backend(settings: Settings) -> PaymentStateBackend:
    """Instantiate the backend selected by STORAGE_BACKEND."""

    if settings.storage_backend == "database":
        return DatabaseStateBackend(get_session_factory())
    if settings.storage_backend == "http":
        return HttpStateBackend(
            base_url=settings.api_base_url,
            timeout_seconds=settings.api_timeout_seconds,
        )
    return LocalStateBackend(
        storage_dir=settings.local_storage_dir,
        storage_key=settings.local_storage_key,
    )


def build_store(
    settings: Settings | None = None,
    *,
    backend: PaymentStateBackend | None = None,
) -> PaymentStore:
    """Create a store over the configured backend and hydrate it."""

    resolved_settings = settings or get_settings()
    store = PaymentStore(
        backend or build_backend(resolved_settings),
        labels=get_labels(resolved_settings.export_locale),
    )
    store.load()
    return store
