from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from registration_service.infrastructure.db.base import Base

EMAIL_CONSTRAINT = "uq_participants_email"

# upper bound of the 32-bit `Integer` primary key
MAX_PARTICIPANT_ID = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ParticipantModel(Base):
    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    surname: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    twitter: Mapped[str] = mapped_column(String(200), nullable=False)
    occupation: Mapped[str] = mapped_column(String(200), nullable=False)
    avatar: Mapped[str] = mapped_column(String(2048), nullable=False)
    accepted_terms: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
        Index("ix_participants_surname_name", "surname", "name"),
    )
