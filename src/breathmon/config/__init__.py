"""Configuration objects and helpers for breathmon.

Settings live in a small YAML file (optionally under a ``monitor:`` block)
and load into the typed :class:`~breathmon.config.runtime.MonitorConfig`
dataclass that the pipeline, CLI, and tests share.
"""

from .runtime import MonitorConfig, config_from_mapping, load_config, save_config

__all__ = ["MonitorConfig", "config_from_mapping", "load_config", "save_config"]
