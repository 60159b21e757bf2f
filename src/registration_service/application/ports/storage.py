from __future__ import annotations

from typing import Protocol


class AvatarStorage(Protocol):
    async def save(self, filename: str, data: bytes) -> str:
        """Persist ``data`` and return its public path."""
        ...

    async def delete(self, public_path: str) -> None: ...
