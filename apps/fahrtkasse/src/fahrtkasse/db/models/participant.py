"""Participant ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fahrtkasse.db.base import Base
from fahrtkasse.domain.roster import MAX_NAME_LENGTH

if TYPE_CHECKING:
    from fahrtkasse.db.models.payment import Payment


class Participant(Base):
    """Represents one person taking part in the shared trip cost."""

    __tablename__ = "participants"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH), nullable=False, default=""
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    payment: Mapped[Payment | None] = relationship(
        "Payment",
        back_populates="participant",
        uselist=False,
    )
