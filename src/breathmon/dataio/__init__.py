"""Data input/output helpers (CSV export and reload).

Utility modules here keep disk-level concerns isolated from the rest of the
application:
- :mod:`export` renders a recording as a deterministic CSV table.
- :mod:`csv_writer` renders and writes CSV text.
- :mod:`log_loader` parses exported files for offline review.
"""
