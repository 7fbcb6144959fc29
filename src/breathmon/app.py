"""Headless command-line entry point for breathmon.

Runs a :class:`~breathmon.core.pipeline.MonitorPipeline` against the
built-in breathing simulator (in simulated time, so a 60 s session finishes
in well under a second) or against JSON lines on stdin, logs the status
surface periodically, and optionally exports the recording as CSV.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import MonitorConfig, load_config
from .core.pipeline import MonitorPipeline
from .core.models import MonitorStatus
from .core.stream_reader import reader_loop
from .dataio.export import EmptyExportError
from .sensors.simulator import BreathingSimulator

logger = logging.getLogger(__name__)


class SimulatedClock:
    """Millisecond clock advanced by the simulator instead of wall time."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = float(start_ms)

    def __call__(self) -> float:
        return self.now_ms


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Breathing monitor streaming core")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (defaults are used when omitted or missing)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read JSON lines from stdin instead of running the simulator",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=10.0,
        help="Simulated session length in seconds (default: 10)",
    )
    parser.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Simulator rate in Hz (default: the configured target rate)",
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Record the session and export it as CSV on exit",
    )
    parser.add_argument(
        "--export-dir",
        type=Path,
        default=None,
        help="Directory for CSV exports (default: export_dir from the config)",
    )
    parser.add_argument(
        "--status-interval",
        type=float,
        default=1.0,
        help="Seconds of stream time between status log lines (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for simulator noise",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def format_status(status: MonitorStatus) -> str:
    channels = " ".join(
        f"{name}={stats.current:.2f}/{stats.average:.2f}" for name, stats in status.per_channel.items()
    )
    return (
        f"rate={status.sample_rate_hz} Hz samples={status.sample_count} "
        f"dropped={status.dropped_count} recording={'on' if status.recording else 'off'} "
        f"recorded={status.recorded_count} {channels}"
    )


def run_simulation(
    cfg: MonitorConfig,
    *,
    duration_s: float,
    rate_hz: Optional[float] = None,
    record: bool = False,
    status_interval_s: float = 1.0,
    seed: Optional[int] = None,
) -> MonitorPipeline:
    clock = SimulatedClock()
    pipeline = MonitorPipeline(cfg, clock=clock)
    simulator = BreathingSimulator(rate_hz or cfg.target_sample_rate_hz, start_ms=clock.now_ms, seed=seed)

    pipeline.start_session()
    pipeline.set_connected(True)
    if record:
        pipeline.start_recording()

    count = max(0, int(duration_s * simulator.rate_hz))
    next_status_ms = status_interval_s * 1000.0
    for reading in simulator.readings(count):
        clock.now_ms = float(reading["timestamp"])
        pipeline.ingest(reading)
        if status_interval_s > 0 and clock.now_ms >= next_status_ms:
            logger.info("[%s] %s", pipeline.session.format_elapsed(), format_status(pipeline.status()))
            next_status_ms += status_interval_s * 1000.0

    pipeline.set_connected(False)
    if record:
        pipeline.stop_recording()
    return pipeline


def run_stdin(cfg: MonitorConfig, *, record: bool = False) -> MonitorPipeline:
    pipeline = MonitorPipeline(cfg)
    pipeline.start_session()
    if record:
        pipeline.start_recording()
    reader_loop(sys.stdin, pipeline)
    if record:
        pipeline.stop_recording()
    return pipeline


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    if args.stdin:
        pipeline = run_stdin(cfg, record=args.record)
    else:
        pipeline = run_simulation(
            cfg,
            duration_s=args.duration,
            rate_hz=args.rate,
            record=args.record,
            status_interval_s=args.status_interval,
            seed=args.seed,
        )

    logger.info("Final status: %s", format_status(pipeline.status()))

    if args.record:
        try:
            pipeline.export_to(args.export_dir)
        except EmptyExportError as exc:
            logger.warning("%s", exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
