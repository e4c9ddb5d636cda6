import logging
import math
import numbers
from typing import Callable, List, Tuple, Union

import numpy as np
import sympy as sp

from pypiecewise.core.exceptions import InvalidConstructionError
from pypiecewise.core.segments import LinearSegment, SegmentTable
from pypiecewise.data.constants import ErrorMessages, ProcessingConstants

logger = logging.getLogger(__name__)


class PiecewiseBuilder:
    """Centralized construction of linear segments from a source function."""

    @staticmethod
    def validate_inputs(function: Callable[[float], float], segments: int,
                        interval: Tuple[float, float]) -> Tuple[int, float, float]:
        """
        Validate construction inputs.
        Returns:
            Tuple of (segments, lo, hi) with the bounds converted to float
        Raises:
            InvalidConstructionError: If any input violates the construction contract
        """
        if not callable(function):
            raise InvalidConstructionError(f"Source function must be callable, got {type(function).__name__}")
        if isinstance(segments, bool) or not isinstance(segments, numbers.Integral) \
                or segments < ProcessingConstants.MIN_SEGMENTS:
            raise InvalidConstructionError(ErrorMessages.INVALID_SEGMENT_COUNT.format(
                min_segments=ProcessingConstants.MIN_SEGMENTS, segments=segments))
        try:
            lo, hi = interval
            lo, hi = float(lo), float(hi)
        except (TypeError, ValueError) as e:
            raise InvalidConstructionError(f"Interval must be a pair of numbers, got {interval!r}") from e
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise InvalidConstructionError(ErrorMessages.NON_FINITE_INTERVAL.format(lo=lo, hi=hi))
        if lo >= hi:
            raise InvalidConstructionError(ErrorMessages.INVALID_INTERVAL.format(lo=lo, hi=hi))
        if segments > ProcessingConstants.WARNING_SEGMENTS:
            logger.warning("High segment count (%d) makes construction and memory use expensive", segments)
        return int(segments), lo, hi

    @staticmethod
    def sample_nodes(function: Callable[[float], float], segments: int,
                     interval: Tuple[float, float]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Sample the source function at the segments + 1 node positions.

        Node i sits at lo + i * step. The last node is pinned to hi so that
        accumulated rounding never opens a gap at the upper boundary.
        """
        segments, lo, hi = PiecewiseBuilder.validate_inputs(function, segments, interval)
        step = (hi - lo) / segments
        logger.debug("Sampling %d nodes over [%.6g, %.6g] with step %.6g", segments + 1, lo, hi, step)
        xs = lo + step * np.arange(segments + 1, dtype=float)
        xs[0] = lo
        xs[-1] = hi
        if not np.all(np.diff(xs) > 0):
            raise InvalidConstructionError(
                f"Interval [{lo}, {hi}) is too narrow to be split into {segments} distinct segments")
        ys = np.empty_like(xs)
        for i, x in enumerate(xs):
            try:
                y = float(function(float(x)))
            except Exception as e:
                logger.error("Source function failed at x=%.6g: %s", x, e, exc_info=True)
                raise InvalidConstructionError(f"Source function failed at x={float(x)!r}: {str(e)}") from e
            if not math.isfinite(y):
                raise InvalidConstructionError(ErrorMessages.NON_FINITE_SAMPLE.format(y=y, x=float(x)))
            ys[i] = y
        logger.debug("Sampled values: y in [%.6g, %.6g]", np.min(ys), np.max(ys))
        return xs, ys

    @staticmethod
    def build_forward_segments(xs: np.ndarray, ys: np.ndarray) -> List[LinearSegment]:
        """Build one forward segment [x0, x1) per pair of consecutive nodes."""
        if len(xs) != len(ys):
            raise ValueError(f"Node arrays must have same length, got {len(xs)} and {len(ys)}")
        if len(xs) < 2:
            raise ValueError("At least 2 nodes required to build a segment")
        segments = []
        for i in range(len(xs) - 1):
            x0, x1 = float(xs[i]), float(xs[i + 1])
            y0, y1 = float(ys[i]), float(ys[i + 1])
            slope = (y1 - y0) / (x1 - x0)
            intercept = y0 - slope * x0
            segments.append(LinearSegment(lo=x0, hi=x1, slope=slope, intercept=intercept))
        logger.debug("Built %d forward segments", len(segments))
        return segments

    @staticmethod
    def build_from_segments(table: SegmentTable, symbol: Union[str, sp.Symbol]) -> sp.Piecewise:
        """
        Create a symbolic piecewise function from a segment table.

        Every segment becomes a piece valid for lo <= symbol < hi. Values not
        covered by any segment evaluate to nan.
        """
        if isinstance(symbol, str):
            symbol = sp.Symbol(symbol)
        logger.info("Building symbolic piecewise function in '%s' from %d segments", symbol, len(table))
        pieces = []
        for segment in table:
            expr = sp.Float(segment.slope) * symbol + sp.Float(segment.intercept)
            condition = sp.And(symbol >= sp.Float(segment.lo), symbol < sp.Float(segment.hi))
            pieces.append((expr, condition))
        pieces.append((sp.nan, True))
        return sp.Piecewise(*pieces)
