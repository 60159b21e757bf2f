from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Participant:
    id: int
    name: str
    surname: str
    email: str
    twitter: str
    occupation: str
    avatar: str
    accepted_terms: bool
    created_at: datetime
