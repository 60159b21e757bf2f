from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParticipantFieldsDTO:
    """Validated textual fields of a registration submission."""

    name: str
    surname: str
    email: str
    twitter: str
    occupation: str


@dataclass(frozen=True, slots=True)
class NewParticipantDTO:
    name: str
    surname: str
    email: str
    twitter: str
    occupation: str
    avatar: str
    accepted_terms: bool = True

    @classmethod
    def from_fields(cls, fields: ParticipantFieldsDTO, avatar: str) -> NewParticipantDTO:
        return cls(
            name=fields.name,
            surname=fields.surname,
            email=fields.email,
            twitter=fields.twitter,
            occupation=fields.occupation,
            avatar=avatar,
        )
