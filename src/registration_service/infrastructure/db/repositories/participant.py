from __future__ import annotations

import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from registration_service.application.dto.participant import NewParticipantDTO
from registration_service.application.exceptions import DuplicateEmailError, PersistenceError
from registration_service.application.repositories.participant import LIST_LIMIT
from registration_service.domain.entities.participant import Participant
from registration_service.infrastructure.db.mappers import participant as mapper
from registration_service.infrastructure.db.models.participant import (
    EMAIL_CONSTRAINT,
    MAX_PARTICIPANT_ID,
    ParticipantModel,
)

logger = logging.getLogger(__name__)


def _is_email_conflict(exc: IntegrityError) -> bool:
    # postgres names the constraint, sqlite names the column
    message = str(exc.orig)
    return EMAIL_CONSTRAINT in message or "participants.email" in message


class ParticipantReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, participant_id: int) -> Participant | None:
        if not 0 <= participant_id <= MAX_PARTICIPANT_ID:
            return None
        try:
            model = await self._session.get(ParticipantModel, participant_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"get_by_id({participant_id}) failed") from exc
        return mapper.model_to_entity(model) if model else None

    async def search(
        self,
        query: str | None,
        *,
        limit: int = LIST_LIMIT,
    ) -> list[Participant]:
        stmt = select(ParticipantModel)
        query = query.strip() if query else ""
        if query:
            first, *rest = query.split()
            remainder = " ".join(rest)
            clauses = [
                ParticipantModel.name.contains(query, autoescape=True),
                ParticipantModel.surname.contains(query, autoescape=True),
            ]
            if remainder:
                clauses.append(
                    and_(
                        ParticipantModel.name.contains(first, autoescape=True),
                        ParticipantModel.surname.contains(remainder, autoescape=True),
                    )
                )
            stmt = stmt.where(or_(*clauses))
        stmt = stmt.order_by(
            ParticipantModel.surname.asc(),
            ParticipantModel.name.asc(),
        ).limit(limit)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("participant search failed") from exc
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ParticipantWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, participant: NewParticipantDTO) -> Participant:
        model = mapper.dto_to_model(participant)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            if _is_email_conflict(exc):
                logger.info("Rejected duplicate email registration")
                raise DuplicateEmailError() from exc
            raise PersistenceError("participant insert failed") from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise PersistenceError("participant insert failed") from exc
        return mapper.model_to_entity(model)
