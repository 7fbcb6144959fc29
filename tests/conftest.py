from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on path for direct test execution
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from breathmon.config import MonitorConfig  # noqa: E402
from breathmon.core.pipeline import MonitorPipeline  # noqa: E402


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now_ms: float = 1_000_000.0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def small_config() -> MonitorConfig:
    # 1 s window at 5 Hz -> 5 points per channel
    return MonitorConfig(time_window_seconds=1.0, target_sample_rate_hz=5.0)


@pytest.fixture
def pipeline(small_config: MonitorConfig, clock: FakeClock) -> MonitorPipeline:
    pipe = MonitorPipeline(small_config, clock=clock)
    pipe.start_session()
    return pipe


def reading(timestamp: float, *values: float) -> dict:
    if len(values) == 1:
        values = values * 3
    payload = {"timestamp": timestamp}
    for i, value in enumerate(values, start=1):
        payload[f"sensor{i}"] = value
    return payload
