from __future__ import annotations

import math
import threading
from collections.abc import Iterable, Iterator
from typing import Dict, Optional

import numpy as np

from .models import ChannelId, Point
from .ringbuffer import RingBuffer


def calculate_capacity(window_seconds: float, rate_hz: float) -> int:
    """
    Compute how many points are needed to cover ``window_seconds`` at
    ``rate_hz``.

    Non-positive or non-finite settings clamp to a single point instead of
    raising.
    """
    try:
        samples = float(window_seconds) * float(rate_hz)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(samples):
        return 1
    return max(1, int(samples))


def initialize_buffers_for_channels(
    channel_ids: Iterable[ChannelId],
    capacity: int,
) -> Dict[ChannelId, "ChannelBuffer"]:
    """
    Pre-create one :class:`ChannelBuffer` per configured channel so buffers are
    ready when samples start arriving.
    """
    return {channel: ChannelBuffer(capacity) for channel in channel_ids}


class ChannelBuffer:
    """Ring buffer of :class:`Point` plus lock for one channel of streaming data.

    Points are kept in arrival order, which is not necessarily increasing
    ``x`` when the transport delivers out of order. The RLock allows a
    producer thread to append while consumers take snapshots.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, capacity: int) -> None:
        self._buffer: RingBuffer[Point] = RingBuffer(max(1, int(capacity)))
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        with self._lock:
            return self._buffer.capacity

    def set_capacity(self, capacity: int) -> None:
        """Resize to ``capacity`` (min 1), truncating the oldest points now."""
        with self._lock:
            self._buffer.resize(max(1, int(capacity)))

    def append(self, point: Point) -> None:
        with self._lock:
            self._buffer.append(Point(float(point[0]), float(point[1])))

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def snapshot(self) -> tuple[Point, ...]:
        """Return an immutable copy of the logical contents, oldest first."""
        with self._lock:
            return tuple(self._buffer)

    def values(self) -> np.ndarray:
        """Return the ``y`` values of the current contents as ``float64``."""
        with self._lock:
            count = len(self._buffer)
            return np.fromiter((p.y for p in self._buffer), dtype=np.float64, count=count)

    def latest(self) -> Optional[Point]:
        """Return the newest point, or ``None`` if the buffer is empty."""
        with self._lock:
            if len(self._buffer) == 0:
                return None
            return self._buffer[-1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.snapshot())
