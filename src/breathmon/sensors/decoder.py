"""
The sensor front-end delivers one JSON object per reading with:

  - timestamp : int    absolute time in milliseconds
  - sensor1   : float  channel value in mV
  - sensor2   : float  channel value in mV
  - sensor3   : float  channel value in mV

Channel names come from the pipeline configuration, so other channel sets
decode the same way. ``decode_sample()`` accepts an already parsed mapping or
the raw JSON text/bytes.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
import time
from typing import Any, Iterable, Mapping

from ..core.models import MAX_TIMESTAMP_MS, ChannelId, Sample
from ..tools.debug import debug_enabled

logger = logging.getLogger(__name__)

TIMESTAMP_FIELD = "timestamp"
PAYLOAD_FIELD = "<payload>"


class DecodeError(ValueError):
    """A raw reading could not be turned into a :class:`Sample`."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


def _coerce_number(field: str, value: Any) -> float:
    if value is None:
        raise DecodeError(field, "missing")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DecodeError(field, f"expected a number, got {type(value).__name__}")
    number = float(value)
    if not math.isfinite(number):
        raise DecodeError(field, f"non-finite value {value!r}")
    return number


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(PAYLOAD_FIELD, f"not UTF-8 ({exc})") from exc
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(PAYLOAD_FIELD, f"bad JSON ({exc})") from exc
    if not isinstance(raw, Mapping):
        raise DecodeError(PAYLOAD_FIELD, f"expected an object, got {type(raw).__name__}")
    return raw


_decode_time_acc = 0.0
_decode_count = 0


def decode_sample(raw: Any, channel_ids: Iterable[ChannelId]) -> Sample:
    """
    Decode one raw reading into a :class:`Sample`.

    Raises :class:`DecodeError` naming the first field that is missing or
    not a finite number. Extra fields are ignored.
    """
    global _decode_time_acc, _decode_count

    debug_on = debug_enabled()
    start = time.perf_counter() if debug_on else 0.0

    record = _as_mapping(raw)
    timestamp = _coerce_number(TIMESTAMP_FIELD, record.get(TIMESTAMP_FIELD))
    if timestamp < 0:
        raise DecodeError(TIMESTAMP_FIELD, f"negative timestamp {timestamp!r}")
    if timestamp > MAX_TIMESTAMP_MS:
        raise DecodeError(TIMESTAMP_FIELD, f"timestamp {timestamp!r} is beyond the representable date range")
    values = {channel: _coerce_number(channel, record.get(channel)) for channel in channel_ids}
    sample = Sample(timestamp=int(timestamp), values=values)

    if debug_on:
        _decode_time_acc += time.perf_counter() - start
        _decode_count += 1
        if _decode_count % 1000 == 0:
            avg_us = (_decode_time_acc / max(1, _decode_count)) * 1e6
            logger.info("decode_sample avg %.1f µs over %d samples", avg_us, _decode_count)

    return sample
