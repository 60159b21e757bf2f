from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from registration_service.config import Settings
from registration_service.infrastructure.db.session import build_engine, build_session_factory
from registration_service.infrastructure.storage.local import LocalAvatarStorage


@dataclass(frozen=True, slots=True)
class AppContext:
    """Process-wide handles shared by every request."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    storage: LocalAvatarStorage

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        engine = build_engine(settings)
        storage = LocalAvatarStorage(Path(settings.UPLOADS_DIR).resolve())
        storage.ensure_root()
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            storage=storage,
        )

    async def aclose(self) -> None:
        await self.engine.dispose()
