"""Streaming ingestion, windowing, and recording core for a breathing monitor."""

from .config import MonitorConfig, load_config
from .core.pipeline import MonitorPipeline
from .dataio.export import EmptyExportError
from .sensors.decoder import DecodeError

__version__ = "0.1.0"

__all__ = [
    "MonitorConfig",
    "load_config",
    "MonitorPipeline",
    "EmptyExportError",
    "DecodeError",
]
