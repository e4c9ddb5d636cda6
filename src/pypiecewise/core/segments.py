import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class FlatSegmentPolicy(Enum):
    """How zero-slope segments are treated when the inverse table is built."""
    SKIP = "skip"
    REJECT = "reject"


@dataclass(frozen=True)
class LinearSegment:
    """
    One linear piece valid over the half-open range [lo, hi).

    The range is expressed on the input axis of the table that owns the
    segment: x for the forward table, y for the inverse table.
    """
    lo: float
    hi: float
    slope: float
    intercept: float

    def contains(self, value: float) -> bool:
        return self.lo <= value < self.hi

    def evaluate(self, value: float) -> float:
        return self.slope * value + self.intercept

    @property
    def width(self) -> float:
        return self.hi - self.lo


class SegmentTable:
    """
    Immutable, lower-bound ordered collection of linear segments.

    Lookup is a binary search over the lower bounds. When the ranges are
    disjoint a value is matched by at most one segment; overlapping ranges
    (an inverse table of a non-monotonic function) are kept and reported by
    `find_all`.
    """

    def __init__(self, segments: Iterable[LinearSegment], name: str = "table") -> None:
        self.name = name
        self._segments: Tuple[LinearSegment, ...] = tuple(sorted(segments, key=lambda s: (s.lo, s.hi)))
        self._lows = np.array([s.lo for s in self._segments], dtype=float)
        self._highs = np.array([s.hi for s in self._segments], dtype=float)
        self._lows.setflags(write=False)
        self._highs.setflags(write=False)
        self.is_disjoint = bool(np.all(self._highs[:-1] <= self._lows[1:])) if len(self._segments) > 1 else True
        logger.debug("SegmentTable '%s' created with %d segments (disjoint=%s)",
                     name, len(self._segments), self.is_disjoint)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[LinearSegment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> LinearSegment:
        return self._segments[index]

    def __repr__(self) -> str:
        return f"SegmentTable(name={self.name!r}, segments={len(self._segments)})"

    @property
    def segments(self) -> Tuple[LinearSegment, ...]:
        return self._segments

    @property
    def bounds(self) -> Optional[Tuple[float, float]]:
        """Lowest lower bound and highest upper bound, or None for an empty table."""
        if not self._segments:
            return None
        return float(self._lows[0]), float(np.max(self._highs))

    def is_contiguous(self) -> bool:
        """True if each segment ends exactly where the next one begins."""
        return bool(np.all(self._highs[:-1] == self._lows[1:]))

    def _upper_index(self, value: float) -> int:
        # Number of segments whose lower bound is <= value
        return int(np.searchsorted(self._lows, value, side='right'))

    def find(self, value: float) -> Optional[int]:
        """Return the index of the first segment containing value, or None."""
        if not math.isfinite(value):
            return None
        upper = self._upper_index(value)
        if upper == 0:
            return None
        if self.is_disjoint:
            index = upper - 1
            return index if value < self._highs[index] else None
        matches = self.find_all(value)
        return matches[0] if matches else None

    def find_all(self, value: float) -> List[int]:
        """Return the indices of every segment containing value."""
        if not math.isfinite(value):
            return []
        upper = self._upper_index(value)
        if self.is_disjoint:
            if upper and value < self._highs[upper - 1]:
                return [upper - 1]
            return []
        return [int(i) for i in np.nonzero(self._highs[:upper] > value)[0]]
