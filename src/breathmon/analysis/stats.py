"""Per-channel summary statistics over the bounded display buffers."""

from __future__ import annotations

from typing import Dict, Mapping

import numpy as np

from ..core.channel_buffer import ChannelBuffer
from ..core.models import ChannelId, ChannelStats, Sample


class StatsAggregator:
    """
    Track the latest value per channel and average the buffered window.

    ``average`` is recomputed from the buffer snapshot on every call, so it
    follows evictions rather than drifting from an all-time running mean.
    """

    def __init__(self, buffers: Mapping[ChannelId, ChannelBuffer]) -> None:
        self._buffers = buffers
        self._current: Dict[ChannelId, float] = {channel: 0.0 for channel in buffers}

    def update(self, sample: Sample) -> None:
        for channel in self._buffers:
            value = sample.values.get(channel)
            if value is not None:
                self._current[channel] = float(value)

    def current(self, channel: ChannelId) -> float:
        """Most recently ingested value for ``channel`` (0.0 before any)."""
        self._require(channel)
        return self._current.get(channel, 0.0)

    def average(self, channel: ChannelId) -> float:
        """Arithmetic mean of the points currently buffered for ``channel``."""
        values = self._require(channel).values()
        if values.size == 0:
            return 0.0
        return float(np.mean(values))

    def summary(self) -> Dict[ChannelId, ChannelStats]:
        return {
            channel: ChannelStats(current=self.current(channel), average=self.average(channel))
            for channel in self._buffers
        }

    def reset(self) -> None:
        for channel in self._current:
            self._current[channel] = 0.0

    def _require(self, channel: ChannelId) -> ChannelBuffer:
        try:
            return self._buffers[channel]
        except KeyError:
            raise KeyError(f"Unknown channel {channel!r}") from None
