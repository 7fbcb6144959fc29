"""Runtime configuration helpers for the ingestion/windowing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

import yaml

from ..analysis.rate import DEFAULT_RATE_HISTORY
from ..core.channel_buffer import calculate_capacity
from ..core.models import DEFAULT_CHANNEL_IDS, ChannelId

# camelCase spellings accepted from front-end style settings files.
_ALIASES = {
    "timeWindowSeconds": "time_window_seconds",
    "targetSampleRateHz": "target_sample_rate_hz",
    "channelIds": "channel_ids",
    "channelLabels": "channel_labels",
    "autoScale": "auto_scale",
    "rateHistory": "rate_history",
    "exportDir": "export_dir",
}


@dataclass(slots=True)
class MonitorConfig:
    """
    Tuning knobs for how samples are buffered, windowed, and exported.

    The defaults assume three sensors at ~1 kHz shown over a 30 s window.
    ``auto_scale`` is carried for renderers only; the pipeline ignores it.
    """

    time_window_seconds: float = 30.0
    target_sample_rate_hz: float = 1000.0
    channel_ids: tuple[ChannelId, ...] = DEFAULT_CHANNEL_IDS
    channel_labels: Dict[ChannelId, str] = field(default_factory=dict)
    auto_scale: bool = False

    rate_history: int = DEFAULT_RATE_HISTORY
    export_dir: Path = Path("exports")

    def capacity(self) -> int:
        """Points kept per channel: window × rate, never less than one."""
        return calculate_capacity(self.time_window_seconds, self.target_sample_rate_hz)

    def sanitized(self) -> MonitorConfig:
        """Return a copy with derived limits applied."""
        channels = tuple(str(c) for c in self.channel_ids)
        if not channels:
            raise ValueError("at least one channel id is required")
        if len(set(channels)) != len(channels):
            raise ValueError(f"duplicate channel ids in {channels!r}")
        return MonitorConfig(
            time_window_seconds=float(self.time_window_seconds),
            target_sample_rate_hz=float(self.target_sample_rate_hz),
            channel_ids=channels,
            channel_labels={str(k): str(v) for k, v in (self.channel_labels or {}).items()},
            auto_scale=bool(self.auto_scale),
            rate_history=max(2, int(self.rate_history)),
            export_dir=Path(self.export_dir).expanduser(),
        )


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`MonitorConfig`."""
    return {f.name for f in fields(MonitorConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``monitor`` block and translate camelCase keys."""
    merged: MutableMapping[str, Any] = {}
    for key, value in data.items():
        if key == "monitor" and isinstance(value, Mapping):
            merged.update(value)
        else:
            merged[key] = value
    return {_ALIASES.get(key, key): value for key, value in merged.items()}


def config_from_mapping(data: Mapping[str, Any] | None) -> MonitorConfig:
    """Build :class:`MonitorConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return MonitorConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    if "channel_ids" in payload:
        channel_ids = payload["channel_ids"]
        if isinstance(channel_ids, str):
            channel_ids = [channel_ids]
        payload["channel_ids"] = tuple(channel_ids)
    return MonitorConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> MonitorConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`MonitorConfig`.
    """
    if path is None:
        return MonitorConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return MonitorConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


def save_config(path: str | Path, cfg: MonitorConfig) -> None:
    """Persist ``cfg`` as YAML under a ``monitor`` block."""
    cfg_path = Path(path)
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Optional[Any]] = {
        "time_window_seconds": cfg.time_window_seconds,
        "target_sample_rate_hz": cfg.target_sample_rate_hz,
        "channel_ids": list(cfg.channel_ids),
        "channel_labels": dict(cfg.channel_labels),
        "auto_scale": cfg.auto_scale,
        "rate_history": cfg.rate_history,
        "export_dir": str(cfg.export_dir),
    }
    with cfg_path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump({"monitor": data}, fh, default_flow_style=False, sort_keys=False)


__all__ = ["MonitorConfig", "config_from_mapping", "load_config", "save_config"]
