from __future__ import annotations

import importlib.util
from pathlib import Path

from breathmon.app import format_status, main, run_simulation
from breathmon.config import MonitorConfig
from breathmon.dataio.log_loader import load_export


def test_run_simulation_fills_buffers_and_records() -> None:
    cfg = MonitorConfig(time_window_seconds=0.5, target_sample_rate_hz=100.0)
    pipe = run_simulation(cfg, duration_s=2.0, record=True, status_interval_s=0.5, seed=0)

    status = pipe.status()
    assert status.sample_count == 200
    assert status.recorded_count == 200
    assert status.sample_rate_hz == 100
    assert not status.recording
    assert not status.connected
    assert len(pipe.snapshot("sensor1")) == 50
    assert "rate=100 Hz" in format_status(status)


def test_main_exports_recording(tmp_path) -> None:
    rc = main(
        [
            "--duration",
            "1",
            "--rate",
            "100",
            "--record",
            "--export-dir",
            str(tmp_path),
            "--status-interval",
            "0",
            "--seed",
            "1",
        ]
    )
    assert rc == 0
    files = list(tmp_path.glob("breathing_data_*.csv"))
    assert len(files) == 1
    records = load_export(files[0], ("sensor1", "sensor2", "sensor3"))
    assert len(records) == 100
    assert records[1].relative_time == 0.01


def test_main_without_recording_writes_nothing(tmp_path) -> None:
    rc = main(["--duration", "0.1", "--export-dir", str(tmp_path), "--status-interval", "0"])
    assert rc == 0
    assert list(tmp_path.iterdir()) == []


def test_checkout_entry_point_forwards_arguments(tmp_path) -> None:
    script = Path(__file__).resolve().parents[1] / "main.py"
    spec = importlib.util.spec_from_file_location("breathmon_checkout_main", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    rc = module.main(["--duration", "0.05", "--rate", "100", "--record", "--export-dir", str(tmp_path)])
    assert rc == 0
    assert len(list(tmp_path.glob("breathing_data_*.csv"))) == 1
