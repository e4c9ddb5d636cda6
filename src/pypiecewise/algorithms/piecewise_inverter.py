import logging
import math
from typing import List, Optional, Sequence, Tuple, Union

from pypiecewise.core.exceptions import InvalidConstructionError, NonInvertibleSegmentError
from pypiecewise.core.segments import FlatSegmentPolicy, LinearSegment
from pypiecewise.data.constants import ErrorMessages, ProcessingConstants

logger = logging.getLogger(__name__)


class PiecewiseInverter:
    """
    Creates inverse segments for linear forward segments.

    A forward segment y = m*x + b over [x0, x1) becomes x = y/m - b/m over
    [min(y0, y1), max(y0, y1)). Segments with |m| <= tolerance are flat and
    have no inverse.
    """

    def __init__(self, tolerance: float = ProcessingConstants.SLOPE_TOLERANCE):
        """Initialize the inverter with numerical tolerance."""
        if tolerance < 0:
            raise ValueError(f"Slope tolerance must be non-negative, got {tolerance}")
        self.tolerance = tolerance
        logger.debug("PiecewiseInverter initialized with tolerance: %.2e", tolerance)

    def is_flat(self, segment: LinearSegment) -> bool:
        """True if the slope is within tolerance or too small to invert in floating point."""
        if abs(segment.slope) <= self.tolerance:
            return True
        return not (math.isfinite(1.0 / segment.slope) and math.isfinite(segment.intercept / segment.slope))

    def invert_segment(self, segment: LinearSegment, index: int = 0,
                       start_value: Optional[float] = None, end_value: Optional[float] = None) -> LinearSegment:
        """
        Invert a single forward segment.
        Args:
            segment: Forward segment to invert
            index: Position of the segment in its table (for messages)
            start_value: Sampled y at segment.lo; evaluated from the segment if omitted
            end_value: Sampled y at segment.hi; evaluated from the segment if omitted
        Returns:
            Inverse segment keyed on the y range
        Raises:
            NonInvertibleSegmentError: If the segment is flat
        """
        y0 = segment.evaluate(segment.lo) if start_value is None else float(start_value)
        y1 = segment.evaluate(segment.hi) if end_value is None else float(end_value)
        if self.is_flat(segment):
            raise NonInvertibleSegmentError(
                ErrorMessages.FLAT_SEGMENT.format(index=index, lo=segment.lo, hi=segment.hi, slope=segment.slope),
                value=y0, segment_index=index)
        # y = m*x + b  -->  x = y/m - b/m
        inverse = LinearSegment(lo=min(y0, y1), hi=max(y0, y1),
                                slope=1.0 / segment.slope,
                                intercept=-segment.intercept / segment.slope)
        logger.debug("Inverted segment %d: slope=%.6g -> %.6g, y in [%.6g, %.6g)",
                     index, segment.slope, inverse.slope, inverse.lo, inverse.hi)
        return inverse

    @staticmethod
    def create_inverse(forward_segments: Sequence[LinearSegment],
                       values: Optional[Sequence[float]] = None,
                       policy: Union[FlatSegmentPolicy, str] = FlatSegmentPolicy.SKIP,
                       tolerance: float = ProcessingConstants.SLOPE_TOLERANCE
                       ) -> Tuple[List[LinearSegment], List[int]]:
        """
        Create the inverse segments of a forward segment sequence.

        Passing the sampled node values keeps adjacent inverse ranges sharing
        exactly the same endpoint, so a monotonic source yields a gap-free,
        non-overlapping inverse table.
        Args:
            forward_segments: Forward segments in x order
            values: Sampled y at each node (len(forward_segments) + 1 entries)
            policy: What to do with flat segments (skip them or reject the whole build)
            tolerance: Slope magnitude at or below which a segment counts as flat
        Returns:
            Tuple of (inverse segments, indices of skipped flat forward segments)
        Raises:
            InvalidConstructionError: If a flat segment is found under the reject policy
        """
        policy = FlatSegmentPolicy(policy)
        if values is not None and len(values) != len(forward_segments) + 1:
            raise ValueError(f"Expected {len(forward_segments) + 1} node values, got {len(values)}")
        logger.info("Creating inverse for %d segments (flat policy: %s)", len(forward_segments), policy.value)
        inverter = PiecewiseInverter(tolerance)
        inverse_segments = []
        flat_indices = []
        for i, segment in enumerate(forward_segments):
            if inverter.is_flat(segment):
                message = ErrorMessages.FLAT_SEGMENT.format(index=i, lo=segment.lo, hi=segment.hi,
                                                            slope=segment.slope)
                if policy is FlatSegmentPolicy.REJECT:
                    raise InvalidConstructionError(message)
                logger.warning("%s; skipped from inverse table", message)
                flat_indices.append(i)
                continue
            start_value = None if values is None else values[i]
            end_value = None if values is None else values[i + 1]
            inverse_segments.append(inverter.invert_segment(segment, i, start_value, end_value))
        logger.info("Created %d inverse segments, %d flat segments skipped",
                    len(inverse_segments), len(flat_indices))
        return inverse_segments, flat_indices
