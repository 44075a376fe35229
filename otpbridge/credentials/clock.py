"""Clock sources for OTP computation."""

from __future__ import annotations

import time
from dataclasses import dataclass


class SystemClock:
    """Wall-clock time in whole Unix seconds."""

    def now(self) -> int:
        return int(time.time())


@dataclass(slots=True)
class FixedClock:
    """Clock pinned to one timestamp, for replaying a code computation."""

    timestamp: int

    def now(self) -> int:
        return self.timestamp
