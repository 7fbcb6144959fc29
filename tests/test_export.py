import pathlib
import tempfile
import unittest
from datetime import datetime, timezone

import numpy as np

from breathmon.core.models import DEFAULT_CHANNEL_IDS, RecordedSample
from breathmon.dataio.export import (
    EmptyExportError,
    export_filename,
    format_records,
    format_timestamp,
    write_export,
)
from breathmon.dataio.log_loader import load_export, parse_timestamp, records_to_array

HEADER = "Timestamp,Relative Time (s),Sensor 1 (mV),Sensor 2 (mV),Sensor 3 (mV)"


def _records():
    return [
        RecordedSample(
            timestamp=1_700_000_000_123,
            relative_time=0.1234567,
            values={"sensor1": 150.25049, "sensor2": -12.0, "sensor3": 0.0004},
        ),
        RecordedSample(
            timestamp=1_700_000_000_124,
            relative_time=0.1244,
            values={"sensor1": -499.9996, "sensor2": 3.14159, "sensor3": 80.0},
        ),
    ]


class ExportFormatTest(unittest.TestCase):
    def test_header_and_rows(self):
        lines = format_records(_records(), DEFAULT_CHANNEL_IDS).splitlines()
        self.assertEqual(lines[0], HEADER)
        self.assertEqual(
            lines[1],
            "2023-11-14T22:13:20.123Z,0.123,150.250,-12.000,0.000",
        )
        self.assertEqual(
            lines[2],
            "2023-11-14T22:13:20.124Z,0.124,-500.000,3.142,80.000",
        )
        self.assertEqual(len(lines), 3)

    def test_output_is_deterministic(self):
        self.assertEqual(
            format_records(_records(), DEFAULT_CHANNEL_IDS),
            format_records(list(_records()), DEFAULT_CHANNEL_IDS),
        )

    def test_empty_records_raise(self):
        with self.assertRaises(EmptyExportError):
            format_records([], DEFAULT_CHANNEL_IDS)

    def test_format_timestamp(self):
        self.assertEqual(format_timestamp(0), "1970-01-01T00:00:00.000Z")
        self.assertEqual(format_timestamp(1_700_000_000_999), "2023-11-14T22:13:20.999Z")
        self.assertEqual(parse_timestamp("2023-11-14T22:13:20.999Z"), 1_700_000_000_999)

    def test_export_filename(self):
        now = datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc)
        self.assertEqual(export_filename(now), "breathing_data_2024-05-01T12-30-45.csv")


class ExportRoundTripTest(unittest.TestCase):
    def test_round_trip_through_text(self):
        original = _records()
        loaded = load_export(format_records(original, DEFAULT_CHANNEL_IDS), DEFAULT_CHANNEL_IDS)

        self.assertEqual(len(loaded), len(original))
        for before, after in zip(original, loaded):
            self.assertEqual(after.timestamp, before.timestamp)
            self.assertAlmostEqual(after.relative_time, before.relative_time, delta=5e-4)
            for channel in DEFAULT_CHANNEL_IDS:
                self.assertAlmostEqual(after.values[channel], before.values[channel], delta=5e-4)

    def test_round_trip_through_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
            path = write_export(pathlib.Path(tmpdir) / "nested", format_records(_records(), DEFAULT_CHANNEL_IDS), now)

            self.assertEqual(path.name, "breathing_data_2024-01-02T03-04-05.csv")
            self.assertTrue(path.read_text(encoding="utf-8").startswith(HEADER + "\n"))

            loaded = load_export(path, DEFAULT_CHANNEL_IDS)
            data = records_to_array(loaded, DEFAULT_CHANNEL_IDS)

            np.testing.assert_allclose(
                data,
                np.array(
                    [
                        [1_700_000_000_123, 0.123, 150.250, -12.0, 0.0],
                        [1_700_000_000_124, 0.124, -500.0, 3.142, 80.0],
                    ]
                ),
            )

    def test_load_rejects_wrong_column_count(self):
        with self.assertRaises(ValueError):
            load_export(HEADER + "\n2023-11-14T22:13:20.123Z,0.1,1.0\n", DEFAULT_CHANNEL_IDS)


if __name__ == "__main__":
    unittest.main()
