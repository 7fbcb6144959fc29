"""Utilities for loading exported recordings back into memory."""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

import numpy as np

from ..core.models import ChannelId, RecordedSample


def parse_timestamp(text: str) -> int:
    """Inverse of :func:`breathmon.dataio.export.format_timestamp`."""
    stripped = text.strip()
    if stripped.endswith("Z"):
        stripped = stripped[:-1] + "+00:00"
    return int(round(datetime.fromisoformat(stripped).timestamp() * 1000.0))


def _read_text(source: Path | str) -> str:
    if isinstance(source, Path):
        return source.read_text(encoding="utf-8")
    return source


def load_export(source: Path | str, channel_ids: Sequence[ChannelId]) -> List[RecordedSample]:
    """
    Parse an exported CSV (a path, or the text itself) into records.

    The header row is skipped; channel columns are matched to
    ``channel_ids`` by position.
    """
    reader = csv.reader(io.StringIO(_read_text(source)))
    rows = list(reader)
    if not rows:
        return []

    records: List[RecordedSample] = []
    expected = 2 + len(channel_ids)
    for line_no, row in enumerate(rows[1:], start=2):
        if not row:
            continue
        if len(row) != expected:
            raise ValueError(f"Line {line_no}: expected {expected} columns, got {len(row)}")
        records.append(
            RecordedSample(
                timestamp=parse_timestamp(row[0]),
                relative_time=float(row[1]),
                values={channel: float(cell) for channel, cell in zip(channel_ids, row[2:])},
            )
        )
    return records


def records_to_array(records: Sequence[RecordedSample], channel_ids: Sequence[ChannelId]) -> np.ndarray:
    """Stack records into an ``(n, 2 + channels)`` array of ms, seconds, values."""
    if not records:
        return np.empty((0, 2 + len(channel_ids)))
    return np.array(
        [
            [record.timestamp, record.relative_time, *(record.values[c] for c in channel_ids)]
            for record in records
        ],
        dtype=np.float64,
    )
