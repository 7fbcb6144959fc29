from __future__ import annotations

"""
Utilities for feeding JSON-lines sample streams into a
:class:`~breathmon.core.pipeline.MonitorPipeline`, optionally from a
background thread.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .pipeline import MonitorPipeline

logger = logging.getLogger(__name__)


def reader_loop(
    stream: Iterable[str],
    pipeline: MonitorPipeline,
    *,
    stop_event: Optional[threading.Event] = None,
) -> int:
    """Read JSON records from a line-oriented stream into ``pipeline``.

    Blank lines are skipped; malformed lines are counted and dropped by the
    pipeline itself. Returns the number of accepted samples. The loop stops
    when the stream is exhausted or ``stop_event`` is set; either way the
    pipeline's buffers and recording are left untouched.
    """
    accepted = 0
    pipeline.set_connected(True)
    try:
        for raw_line in stream:
            if stop_event is not None and stop_event.is_set():
                break

            line = raw_line.strip()
            if not line:
                continue

            if pipeline.ingest(line).ok:
                accepted += 1
    finally:
        pipeline.set_connected(False)
    logger.debug("Reader loop finished after %d samples", accepted)
    return accepted


@dataclass
class StreamReaderHandle:
    thread: threading.Thread
    stop_event: threading.Event
    pipeline: MonitorPipeline

    def stop(self, *, join: bool = False, timeout: Optional[float] = None) -> None:
        self.stop_event.set()
        if join:
            self.thread.join(timeout)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def start_reader(
    stream: Iterable[str],
    pipeline: MonitorPipeline,
    *,
    thread_name: Optional[str] = None,
) -> StreamReaderHandle:
    """
    Start a background thread that ingests JSON lines from *stream*.
    """

    stop_event = threading.Event()

    def _target() -> None:
        try:
            reader_loop(stream, pipeline, stop_event=stop_event)
        except Exception:
            logger.exception("Stream reader failed")

    thread = threading.Thread(
        target=_target,
        name=thread_name or "BreathmonStreamReader",
        daemon=True,
    )
    thread.start()
    return StreamReaderHandle(thread=thread, stop_event=stop_event, pipeline=pipeline)
