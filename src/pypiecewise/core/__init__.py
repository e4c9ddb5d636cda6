"""
Core data structures and exceptions.

This module contains the linear segment and segment table types that
back every approximation, the flat-segment policy and the exception
hierarchy used throughout the pypiecewise library.
"""

from .segments import FlatSegmentPolicy, LinearSegment, SegmentTable
from .exceptions import (ApproximationError, InvalidConstructionError, OutOfDomainError, OutOfRangeError,
                         NonInvertibleSegmentError, AmbiguousInverseError, ConfigurationError)

__all__ = [
    "FlatSegmentPolicy",
    "LinearSegment",
    "SegmentTable",
    "ApproximationError",
    "InvalidConstructionError",
    "OutOfDomainError",
    "OutOfRangeError",
    "NonInvertibleSegmentError",
    "AmbiguousInverseError",
    "ConfigurationError"
]
