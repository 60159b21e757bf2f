from __future__ import annotations

from typing import Protocol

from registration_service.application.repositories.participant import (
    ParticipantReader,
    ParticipantWriter,
)


class UnitOfWork(Protocol):
    participants: ParticipantReader
    participants_w: ParticipantWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
