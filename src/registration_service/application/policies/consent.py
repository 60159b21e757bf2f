"""Consent flag parsing.

HTML checkboxes submit ``on`` and hand-written clients send all kinds of
truthy strings, so the accepted token set is deliberately broad. Anything
outside it counts as "no consent".
"""
from __future__ import annotations

from typing import Any

from registration_service.application.exceptions import ConsentRequiredError

CONSENT_FIELD = "aceptoTerminos"

CONSENT_TOKENS = frozenset({"on", "true", "1", "sí", "si"})


def parse_consent(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.lower() in CONSENT_TOKENS
    return False


def assert_consent(raw: Any) -> None:
    if not parse_consent(raw):
        raise ConsentRequiredError()
