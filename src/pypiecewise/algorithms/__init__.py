"""
Core computational algorithms for piecewise-linear approximation.

This module provides segment construction from a sampled source function,
segment inversion, the bidirectional approximator itself and deviation
analysis helpers.
"""

from .piecewise_builder import PiecewiseBuilder
from .piecewise_inverter import PiecewiseInverter
from .approximator import PiecewiseApproximator
from .deviation import sample_points, max_forward_deviation, max_round_trip_error, find_segment_count

__all__ = [
    "PiecewiseBuilder",
    "PiecewiseInverter",
    "PiecewiseApproximator",
    "sample_points",
    "max_forward_deviation",
    "max_round_trip_error",
    "find_segment_count"
]
