"""Miscellaneous development helpers.

:mod:`debug` holds the ``BREATHMON_DEBUG`` switch and timing helpers used to
instrument the ingest and export paths without touching their behaviour.
"""
