"""Sensor-specific decoding and synthetic sources.

:mod:`decoder` turns raw readings (mappings or JSON text) into typed
:class:`~breathmon.core.models.Sample` objects; :mod:`simulator` produces
breathing-like readings in the same raw shape for demos and tests.
"""
