from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic import BaseModel, EmailStr, Field

from registration_service.application.dto.participant import ParticipantFieldsDTO
from registration_service.application.exceptions import InvalidFieldsError


class ParticipantForm(BaseModel):
    """Textual fields of a registration, keyed by their wire names."""

    name: str = Field(min_length=1, validation_alias="nombre")
    surname: str = Field(min_length=1, validation_alias="apellidos")
    email: EmailStr
    twitter: str = Field(min_length=1, validation_alias="twitter")
    occupation: str = Field(min_length=1, validation_alias="ocupacion")

    model_config = {"extra": "ignore"}


def _group_errors(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        key = str(error["loc"][0]) if error["loc"] else "__root__"
        fields.setdefault(key, []).append(error["msg"])
    return fields


def validate_participant_fields(raw: Mapping[str, Any]) -> ParticipantFieldsDTO:
    """Validate every textual field at once.

    Raises InvalidFieldsError carrying all violations grouped by wire key.
    """
    try:
        form = ParticipantForm.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        raise InvalidFieldsError(_group_errors(exc)) from exc
    return ParticipantFieldsDTO(
        name=form.name,
        surname=form.surname,
        email=str(form.email),
        twitter=form.twitter,
        occupation=form.occupation,
    )
