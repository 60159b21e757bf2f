"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pytest

from registration_service.application.dto.participant import NewParticipantDTO
from registration_service.application.exceptions import DuplicateEmailError, PersistenceError
from registration_service.application.repositories.participant import LIST_LIMIT
from registration_service.domain.entities.participant import Participant
from registration_service.infrastructure.storage.local import LocalAvatarStorage

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
FIXED_MILLIS = int(FIXED_NOW.timestamp() * 1000)


@dataclass
class FixedClock:
    millis: int = FIXED_MILLIS

    def epoch_millis(self) -> int:
        return self.millis


def make_participant(
    *,
    participant_id: int = 1,
    name: str = "Ana",
    surname: str = "García",
    email: str | None = None,
    avatar: str = "/uploads/1_ana.png",
) -> Participant:
    return Participant(
        id=participant_id,
        name=name,
        surname=surname,
        email=email or f"user{participant_id}@correo.es",
        twitter="@ana",
        occupation="Ingeniera",
        avatar=avatar,
        accepted_terms=True,
        created_at=FIXED_NOW,
    )


def valid_fields(**overrides: str) -> dict[str, str]:
    fields = {
        "nombre": "Ana",
        "apellidos": "García López",
        "email": "ana.garcia@correo.es",
        "twitter": "@anagarcia",
        "ocupacion": "Ingeniera",
    }
    fields.update(overrides)
    return fields


@dataclass
class FakeParticipantReader:
    _store: dict[int, Participant] = field(default_factory=dict)

    async def get_by_id(self, participant_id: int) -> Participant | None:
        return self._store.get(participant_id)

    async def search(self, query: str | None, *, limit: int = LIST_LIMIT) -> list[Participant]:
        items = list(self._store.values())
        if query:
            first, *rest = query.split()
            remainder = " ".join(rest)

            def matches(p: Participant) -> bool:
                if query in p.name or query in p.surname:
                    return True
                return bool(remainder) and first in p.name and remainder in p.surname

            items = [p for p in items if matches(p)]
        items.sort(key=lambda p: (p.surname, p.name))
        return items[:limit]


@dataclass
class FakeParticipantWriter:
    _reader: FakeParticipantReader
    fail_with: Exception | None = None

    async def create(self, participant: NewParticipantDTO) -> Participant:
        if self.fail_with is not None:
            raise self.fail_with
        if any(p.email == participant.email for p in self._reader._store.values()):
            raise DuplicateEmailError()
        entity = Participant(
            id=len(self._reader._store) + 1,
            name=participant.name,
            surname=participant.surname,
            email=participant.email,
            twitter=participant.twitter,
            occupation=participant.occupation,
            avatar=participant.avatar,
            accepted_terms=participant.accepted_terms,
            created_at=FIXED_NOW,
        )
        self._reader._store[entity.id] = entity
        return entity


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    participants: FakeParticipantReader = field(default_factory=FakeParticipantReader)
    participants_w: FakeParticipantWriter | None = None
    _committed: bool = False

    def __post_init__(self) -> None:
        if self.participants_w is None:
            self.participants_w = FakeParticipantWriter(self.participants)

    def add(self, participant: Participant) -> None:
        self.participants._store[participant.id] = participant

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        pass


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def storage(uploads_dir: Path) -> LocalAvatarStorage:
    return LocalAvatarStorage(uploads_dir, clock=FixedClock())


@pytest.fixture
def broken_uow() -> FakeUoW:
    uow = FakeUoW()
    uow.participants_w.fail_with = PersistenceError("insert failed")
    return uow
