from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class ProcessingConstants:
    """Processing constants used throughout segment construction and lookup."""
    # Tolerance and precision
    SLOPE_TOLERANCE: Final[float] = 1e-12
    FLAT_VALUE_TOLERANCE: Final[float] = 1e-12
    INVERSE_CANDIDATE_TOLERANCE: Final[float] = 1e-9
    # Segment limits
    MIN_SEGMENTS: Final[int] = 1
    WARNING_SEGMENTS: Final[int] = 100_000
    DEFAULT_MAX_SEGMENTS: Final[int] = 4096
    # Deviation analysis
    DEFAULT_DEVIATION_SAMPLES: Final[int] = 1000
    # Visualization
    DEFAULT_VISUALIZATION_POINTS: Final[int] = 1000
    MAX_PLOTTED_NODES: Final[int] = 200
    # Default symbol names
    DEFAULT_INPUT_SYMBOL: Final[str] = 'x'
    DEFAULT_OUTPUT_SYMBOL: Final[str] = 'y'


@dataclass(frozen=True)
class ErrorMessages:
    """Standardized error message templates."""
    INVALID_SEGMENT_COUNT: Final[str] = "Segment count must be an integer >= {min_segments}, got {segments!r}"
    INVALID_INTERVAL: Final[str] = "Interval lower bound must be less than upper bound, got ({lo}, {hi})"
    NON_FINITE_INTERVAL: Final[str] = "Interval bounds must be finite, got ({lo}, {hi})"
    NON_FINITE_SAMPLE: Final[str] = "Source function returned non-finite value {y!r} at x={x!r}"
    OUT_OF_DOMAIN: Final[str] = "x={value!r} is outside the approximation domain [{lo}, {hi})"
    OUT_OF_RANGE: Final[str] = "y={value!r} is outside the invertible range of the approximation"
    FLAT_SEGMENT: Final[str] = "Segment {index} over [{lo}, {hi}) is flat (slope={slope!r}) and cannot be inverted"
