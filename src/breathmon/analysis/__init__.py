"""Signal analysis utilities (rate estimation and summary statistics).

Modules here stay free of transport and rendering concerns so they can be
reused by the pipeline, command-line scripts, and automated tests alike.
"""

from .rate import RateEstimator
from .stats import StatsAggregator

__all__ = ["RateEstimator", "StatsAggregator"]
