"""Session-scoped recording log feeding CSV export."""

from __future__ import annotations

import logging
import threading

from .models import RecordedSample, Sample

logger = logging.getLogger(__name__)


class Recorder:
    """Append-only log of full multi-channel samples.

    The log is independent from the display buffers: nothing is evicted
    while recording. Activating a new recording discards the previous one.
    """

    def __init__(self) -> None:
        self._records: list[RecordedSample] = []
        self._active = False
        self._lock = threading.RLock()

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        with self._lock:
            active = bool(active)
            if active and not self._active:
                self._records = []
                logger.info("Recording started")
            elif not active and self._active:
                logger.info("Recording stopped. %d samples recorded.", len(self._records))
            self._active = active

    def append(self, sample: Sample, relative_time: float) -> bool:
        """Store ``sample`` if recording is active; return whether it was kept."""
        with self._lock:
            if not self._active:
                return False
            self._records.append(
                RecordedSample(
                    timestamp=sample.timestamp,
                    relative_time=float(relative_time),
                    values=sample.values,
                )
            )
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def drain(self) -> tuple[RecordedSample, ...]:
        """Return the recorded samples in order without clearing them."""
        with self._lock:
            return tuple(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records = []
