"""Session clock: the relative-time origin for one login/connection."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MsClock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time() * 1000.0


class SessionClock:
    def __init__(self, clock: MsClock | None = None) -> None:
        self._clock: MsClock = clock or wall_clock_ms
        self._start_ms: Optional[float] = None

    @property
    def started(self) -> bool:
        return self._start_ms is not None

    @property
    def start_time(self) -> Optional[float]:
        return self._start_ms

    def now(self) -> float:
        return float(self._clock())

    def start(self) -> float:
        """Record the session start; calling again while started is a no-op."""
        if self._start_ms is None:
            self._start_ms = self.now()
            logger.debug("Session started at %.0f ms", self._start_ms)
        return self._start_ms

    def reset(self) -> None:
        self._start_ms = None

    def relative_seconds(self, timestamp_ms: float) -> float:
        """Seconds between session start and ``timestamp_ms`` (0 before start)."""
        if self._start_ms is None:
            return 0.0
        return (float(timestamp_ms) - self._start_ms) / 1000.0

    def elapsed(self) -> float:
        """Milliseconds since the session started (0 before start)."""
        if self._start_ms is None:
            return 0.0
        return self.now() - self._start_ms

    def format_elapsed(self) -> str:
        """Return the elapsed session time as ``HH:MM:SS``."""
        total = int(max(0.0, self.elapsed()) // 1000)
        hours, rest = divmod(total, 3600)
        minutes, seconds = divmod(rest, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
