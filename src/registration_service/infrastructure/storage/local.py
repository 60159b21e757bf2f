"""Avatar files on local disk, served verbatim under a public prefix."""
from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath

from starlette.concurrency import run_in_threadpool

from registration_service.application.ports.clock import SystemClock, TokenClock

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")

# bound on token bumps when names collide within one millisecond
_MAX_ATTEMPTS = 1000


def build_storage_name(original_filename: str, token: int) -> str:
    """``<token>_<sanitized stem><lower-cased extension>``.

    >>> build_storage_name("foo photo.PNG", 1700000000000)
    '1700000000000_foo_photo.png'
    """
    base = PurePosixPath(original_filename.replace("\\", "/")).name
    path = PurePosixPath(base) if base else PurePosixPath("_")
    return f"{token}_{_UNSAFE_CHARS.sub('_', path.stem)}{path.suffix.lower()}"


class LocalAvatarStorage:
    def __init__(
        self,
        root: Path,
        clock: TokenClock | None = None,
        public_prefix: str = PUBLIC_PREFIX,
    ) -> None:
        self.root = root
        self._clock = clock or SystemClock()
        self._public_prefix = public_prefix.rstrip("/")

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    async def save(self, filename: str, data: bytes) -> str:
        name = await run_in_threadpool(self._write_exclusive, filename, data)
        logger.info("Stored avatar %s (%d bytes)", name, len(data))
        return f"{self._public_prefix}/{name}"

    async def delete(self, public_path: str) -> None:
        name = PurePosixPath(public_path).name
        if not name:
            return
        await run_in_threadpool((self.root / name).unlink, missing_ok=True)
        logger.info("Removed avatar %s", name)

    def _write_exclusive(self, filename: str, data: bytes) -> str:
        self.ensure_root()
        token = self._clock.epoch_millis()
        for _ in range(_MAX_ATTEMPTS):
            name = build_storage_name(filename, token)
            try:
                with open(self.root / name, "xb") as fh:
                    fh.write(data)
            except FileExistsError:
                token += 1
                continue
            return name
        raise FileExistsError(f"no free storage name for {filename!r}")
