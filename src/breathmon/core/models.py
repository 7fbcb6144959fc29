"""Shared dataclasses for monitor sessions and samples."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, NamedTuple, Optional

if TYPE_CHECKING:
    from ..sensors.decoder import DecodeError

ChannelId = str

DEFAULT_CHANNEL_IDS: tuple[ChannelId, ...] = ("sensor1", "sensor2", "sensor3")

# Largest epoch-millisecond timestamp a datetime can still represent.
MAX_TIMESTAMP_MS = (datetime.max - datetime(1970, 1, 1)) // timedelta(milliseconds=1)


def _frozen_values(values: Mapping[ChannelId, float]) -> Mapping[ChannelId, float]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class Sample:
    """One decoded multi-channel reading.

    ``timestamp`` is absolute time in milliseconds; ``values`` holds exactly
    the channels configured on the pipeline that decoded it.
    """

    timestamp: int
    values: Mapping[ChannelId, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _frozen_values(self.values))


class Point(NamedTuple):
    """Session-relative ``(x, y)`` point stored in a channel buffer."""

    x: float
    y: float


@dataclass(frozen=True)
class RecordedSample:
    timestamp: int
    relative_time: float
    values: Mapping[ChannelId, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _frozen_values(self.values))


@dataclass(frozen=True)
class ChannelStats:
    current: float = 0.0
    average: float = 0.0


@dataclass(frozen=True)
class MonitorStatus:
    """Snapshot of everything a status bar needs to display."""

    connected: bool
    sample_rate_hz: int
    sample_count: int
    recording: bool
    recorded_count: int
    dropped_count: int = 0
    per_channel: Mapping[ChannelId, ChannelStats] = field(default_factory=dict)


@dataclass(frozen=True)
class IngestResult:
    """Outcome of :meth:`MonitorPipeline.ingest`: a sample or the reason it was dropped."""

    sample: Optional[Sample] = None
    error: Optional["DecodeError"] = None

    @property
    def ok(self) -> bool:
        return self.sample is not None
