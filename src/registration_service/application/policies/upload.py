from __future__ import annotations

from registration_service.application.dto.upload import AvatarUpload
from registration_service.application.exceptions import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)

AVATAR_FIELD = "avatar"

ALLOWED_AVATAR_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
})

MAX_AVATAR_BYTES = 5 * 1024 * 1024


def assert_avatar_acceptable(upload: AvatarUpload) -> None:
    """Raise if the upload has a disallowed media type or is too large."""
    if upload.content_type not in ALLOWED_AVATAR_TYPES:
        raise UnsupportedMediaTypeError()
    if upload.size > MAX_AVATAR_BYTES:
        raise PayloadTooLargeError()
