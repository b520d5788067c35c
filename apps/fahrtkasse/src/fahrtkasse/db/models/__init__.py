"""ORM models for the fahrtkasse domain."""

from fahrtkasse.db.models.participant import Participant
from fahrtkasse.db.models.payment import Payment

__all__ = [
    "Participant",
    "Payment",
]
