from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from registration_service.domain.entities.participant import Participant


class ParticipantResponse(BaseModel):
    id: int
    name: str = Field(serialization_alias="nombre")
    surname: str = Field(serialization_alias="apellidos")
    email: str
    twitter: str
    occupation: str = Field(serialization_alias="ocupacion")
    avatar: str
    accepted_terms: bool = Field(serialization_alias="aceptoTerminos")
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = {"from_attributes": True}

    @classmethod
    def from_entity(cls, participant: Participant) -> ParticipantResponse:
        return cls.model_validate(participant, from_attributes=True)
