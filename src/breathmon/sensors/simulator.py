"""Synthetic breathing signals for demos and benchmarks without hardware."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import numpy as np

BREATHING_RATE_HZ = 0.3  # 18 breaths per minute
HEART_RATE_HZ = 1.2  # 72 BPM


@dataclass(frozen=True)
class ChannelProfile:
    breathing_amplitude: float
    heart_amplitude: float
    phase: float
    noise: float


# Chest, abdominal, and reference sensors.
DEFAULT_PROFILES: Dict[str, ChannelProfile] = {
    "sensor1": ChannelProfile(150.0, 20.0, 0.0, 10.0),
    "sensor2": ChannelProfile(120.0, 15.0, math.pi / 4, 8.0),
    "sensor3": ChannelProfile(80.0, 0.0, math.pi / 2, 5.0),
}


class BreathingSimulator:
    """Generate raw readings shaped like the sensor front-end's JSON objects."""

    def __init__(
        self,
        rate_hz: float = 1000.0,
        *,
        start_ms: float = 0.0,
        profiles: Optional[Dict[str, ChannelProfile]] = None,
        seed: Optional[int] = None,
    ) -> None:
        if rate_hz <= 0:
            raise ValueError("rate_hz must be positive")
        self.rate_hz = float(rate_hz)
        self._interval_ms = 1000.0 / self.rate_hz
        self._start_ms = float(start_ms)
        self._index = 0
        self._profiles = dict(profiles or DEFAULT_PROFILES)
        self._rng = np.random.default_rng(seed)

    def value_at(self, channel: str, t_s: float) -> float:
        profile = self._profiles[channel]
        value = profile.breathing_amplitude * math.sin(
            2.0 * math.pi * BREATHING_RATE_HZ * t_s + profile.phase
        )
        value += profile.heart_amplitude * math.sin(2.0 * math.pi * HEART_RATE_HZ * t_s)
        value += (float(self._rng.random()) - 0.5) * profile.noise
        return value

    def next_reading(self) -> Dict[str, Any]:
        timestamp = self._start_ms + self._index * self._interval_ms
        t_s = (timestamp - self._start_ms) / 1000.0
        self._index += 1
        reading: Dict[str, Any] = {"timestamp": int(timestamp)}
        for channel in self._profiles:
            reading[channel] = self.value_at(channel, t_s)
        return reading

    def readings(self, count: Optional[int] = None) -> Iterator[Dict[str, Any]]:
        """Yield ``count`` readings, or an endless stream when ``count`` is None."""
        produced = 0
        while count is None or produced < count:
            yield self.next_reading()
            produced += 1
