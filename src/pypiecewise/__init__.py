"""
pypiecewise - Bidirectional piecewise-linear approximation of scalar functions.

This library turns an arbitrary continuous function f(x), sampled over a
bounded interval, into a table of linear segments that can be evaluated
forwards (y from x) and backwards (x from y), the latter being useful when
f has no closed-form inverse, e.g. recovering the distance to a magnet
from the flux density measured by a Hall-effect sensor.

Key Features:
- Forward and inverse evaluation through binary-searched segment tables
- Explicit handling of flat (non-invertible) and non-monotonic segments
- Construction from Python callables, SymPy expressions or YAML files
- Symbolic export of both tables as SymPy Piecewise functions
- Deviation analysis and matplotlib visualization

Main Components:
- Core: Segment types, segment tables and exceptions
- Algorithms: Segment construction, inversion and the approximator
- Parsing: YAML configuration parsing and validation
- Visualization: Approximation plotting
- Data: Processing constants and source function factories
"""

# Enhanced version handling with multiple fallbacks
try:
    from ._version import version as __version__
except ImportError:
    try:
        from importlib.metadata import version, PackageNotFoundError
        try:
            __version__ = version("pypiecewise")
        except PackageNotFoundError:
            __version__ = "0.1.0+unknown"
    except ImportError:
        __version__ = "0.1.0+unknown"  # Fallback version

# Core definitions
from .core.segments import FlatSegmentPolicy, LinearSegment, SegmentTable
from .core.exceptions import (ApproximationError, InvalidConstructionError, OutOfDomainError, OutOfRangeError,
                              NonInvertibleSegmentError, AmbiguousInverseError, ConfigurationError)

# Algorithms
from .algorithms.approximator import PiecewiseApproximator
from .algorithms.piecewise_builder import PiecewiseBuilder
from .algorithms.piecewise_inverter import PiecewiseInverter
from .algorithms.deviation import max_forward_deviation, max_round_trip_error, find_segment_count

# Main API functions
from .parsing.api import create_approximator, validate_yaml_file, get_approximator_info

# Visualization
from .visualization.plotters import ApproximationVisualizer

__all__ = [
    # Version
    '__version__',

    # Core classes
    'FlatSegmentPolicy',
    'LinearSegment',
    'SegmentTable',

    # Exceptions
    'ApproximationError',
    'InvalidConstructionError',
    'OutOfDomainError',
    'OutOfRangeError',
    'NonInvertibleSegmentError',
    'AmbiguousInverseError',
    'ConfigurationError',

    # Algorithms
    'PiecewiseApproximator',
    'PiecewiseBuilder',
    'PiecewiseInverter',
    'max_forward_deviation',
    'max_round_trip_error',
    'find_segment_count',

    # Main API
    'create_approximator',
    'validate_yaml_file',
    'get_approximator_info',

    # Visualization
    'ApproximationVisualizer'
]

# Package metadata
__description__ = "Bidirectional piecewise-linear function approximation"
