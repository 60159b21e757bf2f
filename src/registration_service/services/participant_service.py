from __future__ import annotations

from registration_service.application.exceptions import NotFoundError
from registration_service.application.repositories.participant import LIST_LIMIT
from registration_service.application.uow import UnitOfWork
from registration_service.domain.entities.participant import Participant


async def list_participants(
    query: str | None,
    uow: UnitOfWork,
) -> list[Participant]:
    query = query.strip() if query else None
    return await uow.participants.search(query or None, limit=LIST_LIMIT)


async def get_participant(
    participant_id: int,
    uow: UnitOfWork,
) -> Participant:
    participant = await uow.participants.get_by_id(participant_id)
    if participant is None:
        raise NotFoundError()
    return participant
