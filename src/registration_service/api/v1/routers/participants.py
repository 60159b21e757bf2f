from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Request
from starlette.datastructures import UploadFile

from registration_service.api.deps import StorageDep, UoWDep
from registration_service.api.v1.schemas.common import ErrorResponse
from registration_service.api.v1.schemas.participant import ParticipantResponse
from registration_service.application.dto.upload import AvatarUpload
from registration_service.application.exceptions import MalformedBodyError, NotFoundError
from registration_service.application.policies.upload import AVATAR_FIELD, MAX_AVATAR_BYTES
from registration_service.infrastructure.db.models.participant import MAX_PARTICIPANT_ID
from registration_service.services import participant_service, registration_service

router = APIRouter(prefix="/api", tags=["participants"])

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _read_submission(request: Request) -> tuple[dict[str, Any], AvatarUpload | None]:
    """Pull the raw fields and the optional avatar file out of the request body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        async with request.form() as form:
            raw: dict[str, Any] = {
                key: value for key, value in form.multi_items() if isinstance(value, str)
            }
            upload = None
            candidate = form.get(AVATAR_FIELD)
            if isinstance(candidate, UploadFile) and candidate.filename:
                # the part is already spooled to disk; this bounds only what sits in memory
                data = await candidate.read(MAX_AVATAR_BYTES + 1)
                upload = AvatarUpload(
                    filename=candidate.filename,
                    content_type=candidate.content_type or "",
                    data=data,
                )
        return raw, upload

    if not await request.body():
        return {}, None
    try:
        body = await request.json()
    except ValueError as exc:
        raise MalformedBodyError() from exc
    if not isinstance(body, dict):
        raise MalformedBodyError()
    return body, None


def _parse_id(raw_id: str) -> int:
    if not raw_id.isascii() or not raw_id.isdigit():
        raise NotFoundError()
    participant_id = int(raw_id)
    if participant_id > MAX_PARTICIPANT_ID:
        raise NotFoundError()
    return participant_id


@router.get("/listado", response_model=list[ParticipantResponse])
async def list_participants(
    uow: UoWDep,
    q: str | None = Query(None),
) -> list[ParticipantResponse]:
    participants = await participant_service.list_participants(q, uow)
    return [ParticipantResponse.from_entity(p) for p in participants]


@router.get(
    "/participante/{participant_id}",
    response_model=ParticipantResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_participant(participant_id: str, uow: UoWDep) -> ParticipantResponse:
    participant = await participant_service.get_participant(_parse_id(participant_id), uow)
    return ParticipantResponse.from_entity(participant)


@router.post(
    "/registro",
    response_model=ParticipantResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register(
    request: Request,
    uow: UoWDep,
    storage: StorageDep,
) -> ParticipantResponse:
    raw, upload = await _read_submission(request)
    participant = await registration_service.register_participant(raw, upload, storage, uow)
    return ParticipantResponse.from_entity(participant)
