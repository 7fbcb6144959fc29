"""Sensor sample pipeline: decode, buffer, record, and summarize."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from ..analysis.rate import RateEstimator
from ..analysis.stats import StatsAggregator
from ..config.runtime import MonitorConfig
from ..dataio.export import format_records, write_export
from ..sensors.decoder import DecodeError, decode_sample
from .channel_buffer import ChannelBuffer, calculate_capacity, initialize_buffers_for_channels
from .models import ChannelId, ChannelStats, IngestResult, MonitorStatus, Point, RecordedSample
from .recorder import Recorder
from .session import MsClock, SessionClock
from .window import WindowSlice, query_window

__all__ = ["MonitorPipeline"]

logger = logging.getLogger(__name__)


class MonitorPipeline:
    """
    Own the per-channel buffers, recording log, and derived statistics.

    ``ingest`` is the hot path called from the transport callback; it does no
    I/O and rejects malformed readings without touching any state other than
    the dropped-sample counter. ``query_window``/``status`` are read-only and
    meant to be polled from an independent render tick.
    """

    def __init__(self, config: MonitorConfig | None = None, *, clock: MsClock | None = None) -> None:
        self._config = (config or MonitorConfig()).sanitized()
        self.session = SessionClock(clock)
        self.rate = RateEstimator(self._config.rate_history)
        self._buffers: Dict[ChannelId, ChannelBuffer] = initialize_buffers_for_channels(
            self._config.channel_ids, self._config.capacity()
        )
        self.recorder = Recorder()
        self.stats = StatsAggregator(self._buffers)
        self._connected = False
        self._sample_count = 0
        self._dropped_count = 0
        self._lock = threading.RLock()

    # ------------------------------------------------------------- properties
    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def channel_ids(self) -> tuple[ChannelId, ...]:
        return self._config.channel_ids

    @property
    def capacity(self) -> int:
        return calculate_capacity(self._config.time_window_seconds, self._config.target_sample_rate_hz)

    @property
    def sample_count(self) -> int:
        return self._sample_count

    @property
    def dropped_count(self) -> int:
        return self._dropped_count

    @property
    def connected(self) -> bool:
        return self._connected

    def buffer(self, channel: ChannelId) -> ChannelBuffer:
        try:
            return self._buffers[channel]
        except KeyError:
            raise KeyError(f"Unknown channel {channel!r}") from None

    def snapshot(self, channel: ChannelId) -> tuple[Point, ...]:
        return self.buffer(channel).snapshot()

    # ---------------------------------------------------------------- session
    def start_session(self) -> float:
        """Start the relative-time origin (no-op if a session is running)."""
        return self.session.start()

    def reset_session(self) -> None:
        """Forget everything tied to the current login/connection."""
        with self._lock:
            self.recorder.set_active(False)
            self._clear_state()
            self.rate.reset()
            self._dropped_count = 0
            self._connected = False
            self.session.reset()
        logger.info("Session reset")

    def set_connected(self, connected: bool) -> None:
        """Track transport state; disconnecting keeps buffers and recording."""
        connected = bool(connected)
        if connected != self._connected:
            logger.info("Transport %s", "connected" if connected else "disconnected")
        self._connected = connected

    # ----------------------------------------------------------------- ingest
    def ingest(self, raw: Any) -> IngestResult:
        """Decode ``raw`` and, if valid, push it through every stage."""
        try:
            sample = decode_sample(raw, self._config.channel_ids)
        except DecodeError as exc:
            with self._lock:
                self._dropped_count += 1
            logger.warning("Dropping malformed sample (%s)", exc)
            return IngestResult(error=exc)

        with self._lock:
            self.rate.record_arrival(self.session.now())
            relative = self.session.relative_seconds(sample.timestamp)
            for channel, buf in self._buffers.items():
                buf.append(Point(relative, sample.values[channel]))
            self.recorder.append(sample, relative)
            self.stats.update(sample)
            self._sample_count += 1
        return IngestResult(sample=sample)

    def ingest_many(self, raws: Iterable[Any]) -> int:
        """Ingest a batch in order; return how many readings were accepted."""
        accepted = 0
        for raw in raws:
            if self.ingest(raw).ok:
                accepted += 1
        return accepted

    # -------------------------------------------------------------- settings
    def set_time_window(self, seconds: float) -> int:
        """Change the display window; buffers are resized immediately."""
        self._config.time_window_seconds = float(seconds)
        return self._apply_capacity()

    def set_target_rate(self, rate_hz: float) -> int:
        self._config.target_sample_rate_hz = float(rate_hz)
        return self._apply_capacity()

    def _apply_capacity(self) -> int:
        capacity = self.capacity
        with self._lock:
            for buf in self._buffers.values():
                buf.set_capacity(capacity)
        logger.debug("Channel capacity set to %d points", capacity)
        return capacity

    # -------------------------------------------------------------- recording
    @property
    def recording(self) -> bool:
        return self.recorder.active

    def set_recording(self, active: bool) -> None:
        self.recorder.set_active(active)

    def start_recording(self) -> None:
        self.set_recording(True)

    def stop_recording(self) -> None:
        self.set_recording(False)

    def recorded(self) -> tuple[RecordedSample, ...]:
        return self.recorder.drain()

    def clear_data(self) -> None:
        """Empty the display buffers and the recording log."""
        with self._lock:
            self._clear_state()
        logger.info("Data cleared")

    def _clear_state(self) -> None:
        for buf in self._buffers.values():
            buf.clear()
        self.recorder.clear()
        self.stats.reset()
        self._sample_count = 0

    # ------------------------------------------------------------- read side
    def now_seconds(self) -> float:
        return self.session.elapsed() / 1000.0

    def query_window(self, now_seconds: Optional[float] = None) -> Dict[ChannelId, WindowSlice]:
        """Return the visible slice of every channel for the current window."""
        now = self.now_seconds() if now_seconds is None else float(now_seconds)
        window = self._config.time_window_seconds
        with self._lock:
            return {channel: query_window(buf, now, window) for channel, buf in self._buffers.items()}

    def channel_stats(self) -> Mapping[ChannelId, ChannelStats]:
        with self._lock:
            return self.stats.summary()

    def status(self) -> MonitorStatus:
        with self._lock:
            return MonitorStatus(
                connected=self._connected,
                sample_rate_hz=self.rate.current_rate_hz(),
                sample_count=self._sample_count,
                recording=self.recorder.active,
                recorded_count=self.recorder.count(),
                dropped_count=self._dropped_count,
                per_channel=self.channel_stats(),
            )

    # ---------------------------------------------------------------- export
    def export_csv(self) -> str:
        """Render the recording as CSV; raises ``EmptyExportError`` if empty."""
        return format_records(self.recorder.drain(), self._config.channel_ids, self._config.channel_labels)

    def export_to(self, directory: Path | None = None, *, now: Optional[datetime] = None) -> Path:
        text = self.export_csv()
        path = write_export(directory or self._config.export_dir, text, now)
        logger.info("Exported %d recorded samples to %s", self.recorder.count(), path)
        return path
