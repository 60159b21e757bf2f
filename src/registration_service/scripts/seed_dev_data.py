"""Seed development data: registers a handful of sample participants."""
from __future__ import annotations

import asyncio
import logging

from registration_service.application.dto.participant import NewParticipantDTO
from registration_service.application.exceptions import DuplicateEmailError
from registration_service.config import settings
from registration_service.context import AppContext
from registration_service.infrastructure.db import models  # noqa: F401
from registration_service.infrastructure.db.base import Base
from registration_service.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

SAMPLE_PARTICIPANTS = [
    ("Ana", "García López", "ana.garcia@correo.es", "@anagarcia", "Desarrolladora backend"),
    ("Luis", "Martínez", "luis.martinez@correo.es", "@luismtz", "Diseñador"),
    ("María José", "Fernández Ruiz", "mj.fernandez@correo.es", "@mjfr", "Product manager"),
    ("Carlos", "Sánchez", "carlos.sanchez@correo.es", "@csanchez", "Estudiante"),
]


async def seed() -> None:
    context = AppContext.from_settings(settings)
    async with context.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    created = 0
    for name, surname, email, twitter, occupation in SAMPLE_PARTICIPANTS:
        async with context.session_factory() as session:
            uow = SqlAlchemyUoW(session)
            dto = NewParticipantDTO(
                name=name,
                surname=surname,
                email=email,
                twitter=twitter,
                occupation=occupation,
                avatar=f"https://i.pravatar.cc/150?u={email}",
            )
            try:
                await uow.participants_w.create(dto)
            except DuplicateEmailError:
                logger.info("Skipping %s, already registered", email)
                continue
            await uow.commit()
            created += 1

    await context.aclose()
    logger.info("Seeded %d participants", created)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
