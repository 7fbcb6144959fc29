"""Read-side projection of channel buffers onto the current display window."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .channel_buffer import ChannelBuffer
from .models import Point


@dataclass(frozen=True)
class WindowSlice:
    """Points visible in ``[range_start, range_end]`` for one channel."""

    points: tuple[Point, ...]
    range_start: float
    range_end: float

    def __len__(self) -> int:
        return len(self.points)

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(x, y)`` as ``float64`` arrays for plotting backends."""
        count = len(self.points)
        if count == 0:
            return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
        xs = np.fromiter((p.x for p in self.points), dtype=np.float64, count=count)
        ys = np.fromiter((p.y for p in self.points), dtype=np.float64, count=count)
        return xs, ys


def window_bounds(now_seconds: float, window_seconds: float) -> tuple[float, float]:
    return max(0.0, float(now_seconds) - float(window_seconds)), float(now_seconds)


def query_window(
    buffer: ChannelBuffer,
    now_seconds: float,
    window_seconds: float,
) -> WindowSlice:
    """
    Return the points of ``buffer`` with ``x >= max(0, now - window)``.

    Arrival order is preserved and no upper bound is applied, so points
    stamped after ``now_seconds`` stay visible. The buffer is not modified.
    """
    range_start, range_end = window_bounds(now_seconds, window_seconds)
    points = tuple(p for p in buffer.snapshot() if p.x >= range_start)
    return WindowSlice(points=points, range_start=range_start, range_end=range_end)
