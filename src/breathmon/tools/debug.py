"""Opt-in timing instrumentation gated by ``BREATHMON_DEBUG``."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_override: Optional[bool] = None


def _env_flag() -> bool:
    return os.getenv("BREATHMON_DEBUG", "").strip().lower() in _TRUTHY


def set_debug(enabled: Optional[bool]) -> None:
    """Force instrumentation on/off; ``None`` falls back to the environment."""
    global _override
    _override = enabled


def debug_enabled() -> bool:
    if _override is not None:
        return _override
    return _env_flag()


@contextmanager
def time_block(label: str, *, emitter: Callable[[str], None] | None = None) -> Iterator[None]:
    """
    Report how long the wrapped block took, but only while debugging.

    Messages go to ``emitter`` when given, otherwise to this module's logger
    at DEBUG level.
    """
    if not debug_enabled():
        yield
        return

    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        (emitter or logger.debug)(f"{label}: {elapsed_ms:.3f} ms")
