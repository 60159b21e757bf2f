from __future__ import annotations

import time
from typing import Protocol


class TokenClock(Protocol):
    """Source of the millisecond token prefixed to stored avatar names."""

    def epoch_millis(self) -> int: ...


class SystemClock:
    def epoch_millis(self) -> int:
        return time.time_ns() // 1_000_000
