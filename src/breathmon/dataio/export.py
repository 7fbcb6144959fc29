"""Tabular export of a recording session."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Mapping, Optional, Sequence

from ..core.models import ChannelId, RecordedSample
from ..tools.debug import time_block
from . import csv_writer

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TIMESTAMP_HEADER = "Timestamp"
RELATIVE_TIME_HEADER = "Relative Time (s)"
FILENAME_PREFIX = "breathing_data_"


class EmptyExportError(RuntimeError):
    """Export was requested but nothing has been recorded."""


def default_channel_label(index: int) -> str:
    return f"Sensor {index + 1} (mV)"


def channel_headers(
    channel_ids: Sequence[ChannelId],
    labels: Optional[Mapping[ChannelId, str]] = None,
) -> list[str]:
    labels = labels or {}
    return [labels.get(channel, default_channel_label(i)) for i, channel in enumerate(channel_ids)]


def format_timestamp(timestamp_ms: int) -> str:
    """Render epoch milliseconds as ISO-8601 UTC, e.g. ``2024-05-01T12:00:00.250Z``."""
    moment = _EPOCH + timedelta(milliseconds=int(timestamp_ms))
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_records(
    records: Sequence[RecordedSample],
    channel_ids: Sequence[ChannelId],
    labels: Optional[Mapping[ChannelId, str]] = None,
) -> str:
    """
    Render ``records`` as CSV text: header row, then one row per sample.

    Raises :class:`EmptyExportError` when ``records`` is empty so callers
    never mistake "nothing recorded" for a header-only table.
    """
    if not records:
        raise EmptyExportError("No recorded data to export")

    headers = [TIMESTAMP_HEADER, RELATIVE_TIME_HEADER, *channel_headers(channel_ids, labels)]
    with time_block(f"format_records({len(records)})"):
        rows = (
            [
                format_timestamp(record.timestamp),
                f"{record.relative_time:.3f}",
                *(f"{float(record.values[channel]):.3f}" for channel in channel_ids),
            ]
            for record in records
        )
        return csv_writer.render_rows(headers, rows)


def export_filename(now: Optional[datetime] = None) -> str:
    """Return ``breathing_data_<YYYY-MM-DDTHH-MM-SS>.csv`` for ``now`` (UTC)."""
    moment = now or datetime.now(timezone.utc)
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-")
    return f"{FILENAME_PREFIX}{stamp}.csv"


def write_export(directory: Path, text: str, now: Optional[datetime] = None) -> Path:
    path = Path(directory) / export_filename(now)
    csv_writer.write_text(path, text)
    logger.debug("Wrote %s", path)
    return path
