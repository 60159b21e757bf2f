from __future__ import annotations

from typing import Protocol

from registration_service.application.dto.participant import NewParticipantDTO
from registration_service.domain.entities.participant import Participant

LIST_LIMIT = 200


class ParticipantReader(Protocol):
    async def get_by_id(self, participant_id: int) -> Participant | None: ...

    async def search(
        self, query: str | None, *, limit: int = LIST_LIMIT
    ) -> list[Participant]:
        """Participants ordered by surname, then name.

        A non-empty query matches name or surname containing it, or a
        "first-name rest" split against name and surname respectively.
        """
        ...


class ParticipantWriter(Protocol):
    async def create(self, participant: NewParticipantDTO) -> Participant:
        """Insert a participant.

        Raises DuplicateEmailError when the email is already registered.
        """
        ...
