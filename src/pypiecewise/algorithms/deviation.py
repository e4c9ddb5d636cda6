import logging
from typing import Callable, Tuple

import numpy as np

from pypiecewise.algorithms.approximator import PiecewiseApproximator
from pypiecewise.core.exceptions import OutOfRangeError
from pypiecewise.data.constants import ProcessingConstants

logger = logging.getLogger(__name__)


def sample_points(domain: Tuple[float, float], samples: int) -> np.ndarray:
    """Evenly spaced points covering the half-open domain [lo, hi)."""
    if samples < 1:
        raise ValueError(f"Sample count must be at least 1, got {samples}")
    lo, hi = domain
    return np.linspace(lo, hi, samples, endpoint=False)


def max_forward_deviation(approximator: PiecewiseApproximator, function: Callable[[float], float],
                          samples: int = ProcessingConstants.DEFAULT_DEVIATION_SAMPLES) -> float:
    """Maximum |approximation(x) - f(x)| over evenly spaced points of the domain."""
    xs = sample_points(approximator.domain, samples)
    approx_values = approximator.evaluate_forward_many(xs)
    true_values = np.array([float(function(float(x))) for x in xs])
    deviation = float(np.max(np.abs(approx_values - true_values)))
    logger.debug("Max forward deviation of '%s' over %d samples: %.6e", approximator.name, samples, deviation)
    return deviation


def max_round_trip_error(approximator: PiecewiseApproximator,
                         samples: int = ProcessingConstants.DEFAULT_DEVIATION_SAMPLES) -> float:
    """
    Maximum |inverse(forward(x)) - x| over evenly spaced points of the domain.

    Points whose approximated value cannot be inverted (flat or ambiguous
    regions, or the excluded upper end of an inverse range) are skipped.
    Returns 0.0 when no point can be inverted.
    """
    errors = []
    skipped = 0
    for x in sample_points(approximator.domain, samples):
        y = approximator.evaluate_forward(float(x))
        try:
            errors.append(abs(approximator.evaluate_inverse(y) - x))
        except OutOfRangeError:
            skipped += 1
    if skipped:
        logger.debug("Round trip skipped %d of %d samples that could not be inverted", skipped, samples)
    return float(max(errors)) if errors else 0.0


def find_segment_count(function: Callable[[float], float], interval: Tuple[float, float], tolerance: float,
                       start: int = ProcessingConstants.MIN_SEGMENTS,
                       max_segments: int = ProcessingConstants.DEFAULT_MAX_SEGMENTS,
                       samples: int = ProcessingConstants.DEFAULT_DEVIATION_SAMPLES, **kwargs) -> int:
    """
    Smallest segment count of the form start * 2**k whose forward deviation is within tolerance.
    Args:
        function: Source function
        interval: (lo, hi) construction interval
        tolerance: Maximum acceptable absolute deviation
        start: First segment count tried
        max_segments: Upper limit on the segment count
        samples: Evaluation points per deviation check
        **kwargs: Forwarded to the PiecewiseApproximator constructor
    Raises:
        ValueError: If the tolerance is not reached within max_segments
    """
    if tolerance <= 0:
        raise ValueError(f"Tolerance must be positive, got {tolerance}")
    segments = start
    while segments <= max_segments:
        approximator = PiecewiseApproximator(function, segments, interval, **kwargs)
        deviation = max_forward_deviation(approximator, function, samples)
        logger.debug("Segments=%d: max deviation %.6e (tolerance %.6e)", segments, deviation, tolerance)
        if deviation <= tolerance:
            logger.info("Tolerance %.3e reached with %d segments", tolerance, segments)
            return segments
        segments *= 2
    logger.error("Tolerance %.3e not reached within %d segments", tolerance, max_segments)
    raise ValueError(f"Tolerance {tolerance} not reached with at most {max_segments} segments")
