from __future__ import annotations

from collections import deque
from typing import Deque, Iterable

DEFAULT_RATE_HISTORY = 100


class RateEstimator:
    """
    Estimate the effective sample rate from recent arrival timestamps.

    Notes
    -----
    - Timestamps are in milliseconds and only the newest ``history`` are kept.
    - The rate is ``round((count - 1) / span_seconds)`` over that window.
    - When the window spans zero time (bursty delivery stamped with the same
      millisecond) the last well-defined rate is reported, or 0 if none has
      been computed yet.
    """

    def __init__(self, history: int = DEFAULT_RATE_HISTORY) -> None:
        if history <= 1:
            raise ValueError("history must be > 1")
        self._times: Deque[float] = deque(maxlen=int(history))
        self._last_hz = 0

    def record_arrival(self, t_ms: float) -> None:
        """
        Append a new arrival timestamp.

        Parameters
        ----------
        t_ms:
            Arrival time in milliseconds.
        """
        self._times.append(float(t_ms))
        span_ms = self._times[-1] - self._times[0]
        if len(self._times) >= 2 and span_ms > 0:
            self._last_hz = int(round((len(self._times) - 1) / (span_ms / 1000.0)))

    def current_rate_hz(self) -> int:
        """Return the rate over the current window (see class notes)."""
        if len(self._times) < 2:
            return 0
        return self._last_hz

    @property
    def buffer_span_ms(self) -> float:
        """Time span (milliseconds) covered by the current timestamp window."""
        if len(self._times) < 2:
            return 0.0
        return self._times[-1] - self._times[0]

    @property
    def buffer_size(self) -> int:
        """Number of timestamps currently in the window."""
        return len(self._times)

    @property
    def history(self) -> int:
        return self._times.maxlen or 0

    def reset(self) -> None:
        """Clear all timestamps and the last known rate."""
        self._times.clear()
        self._last_hz = 0

    def feed_times(self, times: Iterable[float]) -> None:
        """Convenience method to bulk-add timestamps."""
        for t in times:
            self.record_arrival(t)
