"""Storage backends implementing the full-replace payment state contract."""

from fahrtkasse.persistence.contract import PaymentStateBackend
from fahrtkasse.persistence.database_backend import DatabaseStateBackend
from fahrtkasse.persistence.http_backend import HttpStateBackend
from fahrtkasse.persistence.local_backend import LocalStateBackend

__all__ = [
    "DatabaseStateBackend",
    "HttpStateBackend",
    "LocalStateBackend",
    "PaymentStateBackend",
]
