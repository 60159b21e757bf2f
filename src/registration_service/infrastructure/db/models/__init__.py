"""Import all models so Base.metadata knows every table."""
from registration_service.infrastructure.db.models.participant import ParticipantModel

__all__ = [
    "ParticipantModel",
]
