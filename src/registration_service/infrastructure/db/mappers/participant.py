from __future__ import annotations

from registration_service.application.dto.participant import NewParticipantDTO
from registration_service.domain.entities.participant import Participant
from registration_service.infrastructure.db.models.participant import ParticipantModel


def model_to_entity(model: ParticipantModel) -> Participant:
    return Participant(
        id=model.id,
        name=model.name,
        surname=model.surname,
        email=model.email,
        twitter=model.twitter,
        occupation=model.occupation,
        avatar=model.avatar,
        accepted_terms=model.accepted_terms,
        created_at=model.created_at,
    )


def dto_to_model(dto: NewParticipantDTO) -> ParticipantModel:
    return ParticipantModel(
        name=dto.name,
        surname=dto.surname,
        email=dto.email,
        twitter=dto.twitter,
        occupation=dto.occupation,
        avatar=dto.avatar,
        accepted_terms=dto.accepted_terms,
    )
