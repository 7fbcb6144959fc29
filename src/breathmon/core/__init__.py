"""Core streaming pipeline: sessions, buffers, windows, and recording.

The leaf data structures are re-exported here; the
:class:`~breathmon.core.pipeline.MonitorPipeline` that wires them together
lives in :mod:`breathmon.core.pipeline` and is re-exported from the
top-level package.
"""

from .channel_buffer import ChannelBuffer, calculate_capacity
from .models import (
    DEFAULT_CHANNEL_IDS,
    ChannelId,
    ChannelStats,
    IngestResult,
    MonitorStatus,
    Point,
    RecordedSample,
    Sample,
)
from .recorder import Recorder
from .ringbuffer import RingBuffer
from .session import SessionClock
from .window import WindowSlice, query_window

__all__ = [
    "ChannelBuffer",
    "calculate_capacity",
    "DEFAULT_CHANNEL_IDS",
    "ChannelId",
    "ChannelStats",
    "IngestResult",
    "MonitorStatus",
    "Point",
    "RecordedSample",
    "Sample",
    "Recorder",
    "RingBuffer",
    "SessionClock",
    "WindowSlice",
    "query_window",
]
