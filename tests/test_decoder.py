import json
import math
import unittest

import numpy as np

from breathmon.core.models import DEFAULT_CHANNEL_IDS, MAX_TIMESTAMP_MS
from breathmon.sensors.decoder import PAYLOAD_FIELD, DecodeError, decode_sample


def _reading(**overrides):
    payload = {"timestamp": 1_700_000_000_000, "sensor1": 1.5, "sensor2": -2.0, "sensor3": 3}
    payload.update(overrides)
    return payload


class DecodeSampleTest(unittest.TestCase):
    def test_decodes_mapping(self):
        sample = decode_sample(_reading(), DEFAULT_CHANNEL_IDS)
        self.assertEqual(sample.timestamp, 1_700_000_000_000)
        self.assertEqual(dict(sample.values), {"sensor1": 1.5, "sensor2": -2.0, "sensor3": 3.0})

    def test_decodes_json_text_and_bytes(self):
        text = json.dumps(_reading())
        self.assertEqual(decode_sample(text, DEFAULT_CHANNEL_IDS).values["sensor1"], 1.5)
        self.assertEqual(decode_sample(text.encode("utf-8"), DEFAULT_CHANNEL_IDS).timestamp, 1_700_000_000_000)

    def test_ignores_extra_fields(self):
        sample = decode_sample(_reading(battery=88), DEFAULT_CHANNEL_IDS)
        self.assertEqual(set(sample.values), set(DEFAULT_CHANNEL_IDS))

    def test_missing_channel_names_field(self):
        payload = _reading()
        del payload["sensor2"]
        with self.assertRaises(DecodeError) as ctx:
            decode_sample(payload, DEFAULT_CHANNEL_IDS)
        self.assertEqual(ctx.exception.field, "sensor2")

    def test_missing_timestamp(self):
        payload = _reading()
        del payload["timestamp"]
        with self.assertRaises(DecodeError) as ctx:
            decode_sample(payload, DEFAULT_CHANNEL_IDS)
        self.assertEqual(ctx.exception.field, "timestamp")

    def test_rejects_non_numeric_values(self):
        for bad in ("12.5", True, None, [1], math.nan, math.inf):
            with self.subTest(value=bad):
                with self.assertRaises(DecodeError) as ctx:
                    decode_sample(_reading(sensor3=bad), DEFAULT_CHANNEL_IDS)
                self.assertEqual(ctx.exception.field, "sensor3")

    def test_rejects_negative_timestamp(self):
        with self.assertRaises(DecodeError) as ctx:
            decode_sample(_reading(timestamp=-1), DEFAULT_CHANNEL_IDS)
        self.assertEqual(ctx.exception.field, "timestamp")

    def test_rejects_timestamp_beyond_date_range(self):
        for bad in (MAX_TIMESTAMP_MS + 1, 1e300):
            with self.subTest(timestamp=bad):
                with self.assertRaises(DecodeError) as ctx:
                    decode_sample(_reading(timestamp=bad), DEFAULT_CHANNEL_IDS)
                self.assertEqual(ctx.exception.field, "timestamp")
        edge = decode_sample(_reading(timestamp=MAX_TIMESTAMP_MS), DEFAULT_CHANNEL_IDS)
        self.assertEqual(edge.timestamp, MAX_TIMESTAMP_MS)

    def test_accepts_numpy_scalars(self):
        payload = {
            "timestamp": np.int64(1000),
            "sensor1": np.float32(1.5),
            "sensor2": np.float64(-2.0),
            "sensor3": np.int16(3),
        }
        sample = decode_sample(payload, DEFAULT_CHANNEL_IDS)
        self.assertEqual(sample.timestamp, 1000)
        self.assertIsInstance(sample.timestamp, int)
        self.assertEqual(dict(sample.values), {"sensor1": 1.5, "sensor2": -2.0, "sensor3": 3.0})
        self.assertIsInstance(sample.values["sensor1"], float)

    def test_rejects_numpy_bool(self):
        with self.assertRaises(DecodeError):
            decode_sample(_reading(sensor1=np.bool_(True)), DEFAULT_CHANNEL_IDS)

    def test_sample_values_are_read_only(self):
        sample = decode_sample(_reading(), DEFAULT_CHANNEL_IDS)
        with self.assertRaises(TypeError):
            sample.values["sensor1"] = 0.0  # type: ignore[index]

    def test_rejects_bad_payloads(self):
        for bad in ("not-json", b"\xff\xfe", "[1, 2, 3]", 42):
            with self.subTest(payload=bad):
                with self.assertRaises(DecodeError) as ctx:
                    decode_sample(bad, DEFAULT_CHANNEL_IDS)
                self.assertEqual(ctx.exception.field, PAYLOAD_FIELD)

    def test_custom_channel_set(self):
        sample = decode_sample({"timestamp": 5, "chest": 1, "belly": 2}, ("chest", "belly"))
        self.assertEqual(tuple(sample.values), ("chest", "belly"))

    def test_decode_error_is_value_error(self):
        self.assertTrue(issubclass(DecodeError, ValueError))


if __name__ == "__main__":
    unittest.main()
