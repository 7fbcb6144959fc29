"""CSV writing helpers for recorded sensor data."""

import csv
import io
from pathlib import Path
from typing import Any, Iterable, Sequence


def render_rows(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Return a header row and all data rows as CSV text with ``\\n`` endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def write_text(path: Path, text: str) -> Path:
    """
    Write already rendered CSV ``text`` to ``path`` as UTF-8.

    Directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        csvfile.write(text)
    return path
