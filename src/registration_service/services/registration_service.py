from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from registration_service.application.dto.participant import NewParticipantDTO
from registration_service.application.dto.upload import AvatarUpload
from registration_service.application.exceptions import MissingAvatarError
from registration_service.application.policies.consent import CONSENT_FIELD, assert_consent
from registration_service.application.policies.upload import (
    AVATAR_FIELD,
    assert_avatar_acceptable,
)
from registration_service.application.ports.storage import AvatarStorage
from registration_service.application.uow import UnitOfWork
from registration_service.application.validation import validate_participant_fields
from registration_service.domain.entities.participant import Participant

logger = logging.getLogger(__name__)


def _external_avatar(raw: Mapping[str, Any]) -> str | None:
    value = raw.get(AVATAR_FIELD)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


async def register_participant(
    raw: Mapping[str, Any],
    upload: AvatarUpload | None,
    storage: AvatarStorage,
    uow: UnitOfWork,
) -> Participant:
    """Validate a submission, store its avatar and create the participant.

    Every check runs before anything touches disk or the database. If the
    insert fails after the avatar was written, the file is removed again.
    """
    if upload is not None:
        assert_avatar_acceptable(upload)

    fields = validate_participant_fields(raw)

    external_avatar = None if upload is not None else _external_avatar(raw)
    if upload is None and external_avatar is None:
        raise MissingAvatarError()

    assert_consent(raw.get(CONSENT_FIELD))

    stored_path: str | None = None
    if upload is not None:
        stored_path = await storage.save(upload.filename, upload.data)
    avatar = stored_path or external_avatar
    assert avatar is not None

    try:
        participant = await uow.participants_w.create(
            NewParticipantDTO.from_fields(fields, avatar),
        )
        await uow.commit()
    except Exception:
        if stored_path is not None:
            await _discard_avatar(storage, stored_path)
        raise

    logger.info("Registered participant %d", participant.id)
    return participant


async def _discard_avatar(storage: AvatarStorage, public_path: str) -> None:
    try:
        await storage.delete(public_path)
    except OSError:
        logger.exception("Could not remove orphaned avatar %s", public_path)
