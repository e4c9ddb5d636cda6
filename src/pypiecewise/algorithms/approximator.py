import logging
import math
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import numpy as np
import sympy as sp

from pypiecewise.algorithms.piecewise_builder import PiecewiseBuilder
from pypiecewise.algorithms.piecewise_inverter import PiecewiseInverter
from pypiecewise.core.exceptions import (AmbiguousInverseError, InvalidConstructionError, NonInvertibleSegmentError,
                                         OutOfDomainError, OutOfRangeError)
from pypiecewise.core.segments import FlatSegmentPolicy, SegmentTable
from pypiecewise.data.constants import ErrorMessages, ProcessingConstants

logger = logging.getLogger(__name__)


class PiecewiseApproximator:
    """
    Piecewise-linear approximation of a scalar function, usable in both directions.

    The source function is sampled at segments + 1 evenly spaced nodes over
    [lo, hi). Each pair of consecutive nodes gives one forward segment
    (y from x) and, unless it is flat, one inverse segment (x from y). Both
    tables are built in the constructor and never change afterwards, so all
    queries are side-effect free.

    Examples:
        >>> approx = PiecewiseApproximator(lambda x: 2 * x, 1, (0.0, 5.0))
        >>> approx.evaluate_forward(1.0)
        2.0
        >>> approx.evaluate_inverse(2.0)
        1.0
    """

    def __init__(self, function: Callable[[float], float], segments: int, interval: Tuple[float, float],
                 flat_segment_policy: Union[FlatSegmentPolicy, str] = FlatSegmentPolicy.SKIP,
                 slope_tolerance: float = ProcessingConstants.SLOPE_TOLERANCE,
                 name: Optional[str] = None) -> None:
        """
        Build the forward and inverse segment tables.
        Args:
            function: Source function taking and returning a float
            segments: Number of linear segments (>= 1)
            interval: (lo, hi) construction interval with lo < hi
            flat_segment_policy: 'skip' leaves flat segments out of the inverse table,
                'reject' refuses to build an approximator containing one
            slope_tolerance: Slope magnitude at or below which a segment is flat
            name: Optional label used in log messages and plots
        Raises:
            InvalidConstructionError: If the inputs are invalid or the source function
                cannot be sampled over the interval
        """
        self.name = name or getattr(function, '__name__', 'function')
        logger.info("Building piecewise approximation of '%s' with %s segments over %s",
                    self.name, segments, interval)
        try:
            policy = FlatSegmentPolicy(flat_segment_policy)
        except ValueError as e:
            valid = [p.value for p in FlatSegmentPolicy]
            raise InvalidConstructionError(
                f"Invalid flat segment policy {flat_segment_policy!r}, expected one of {valid}") from e
        if not isinstance(slope_tolerance, (int, float)) or not math.isfinite(slope_tolerance) \
                or slope_tolerance < 0:
            raise InvalidConstructionError(f"Slope tolerance must be a finite number >= 0, got {slope_tolerance!r}")
        xs, ys = PiecewiseBuilder.sample_nodes(function, segments, interval)
        forward_segments = PiecewiseBuilder.build_forward_segments(xs, ys)
        inverse_segments, flat_indices = PiecewiseInverter.create_inverse(
            forward_segments, ys, policy, slope_tolerance)
        self._flat_segment_policy = policy
        self._slope_tolerance = float(slope_tolerance)
        self._forward_table = SegmentTable(forward_segments, name="forward")
        self._inverse_table = SegmentTable(inverse_segments, name="inverse")
        self._flat_segments = tuple(flat_indices)
        self._flat_ranges = tuple((float(min(ys[i], ys[i + 1])), float(max(ys[i], ys[i + 1])))
                                  for i in flat_indices)
        self._domain = (float(xs[0]), float(xs[-1]))
        self._value_range = (float(np.min(ys)), float(np.max(ys)))
        if not self._inverse_table.is_disjoint:
            logger.warning("Source '%s' is not monotonic over %s; inverse queries in overlapping "
                           "ranges will be reported as ambiguous", self.name, self._domain)
        logger.info("Built approximation of '%s': %d forward segments, %d inverse segments",
                    self.name, len(self._forward_table), len(self._inverse_table))

    @classmethod
    def from_expression(cls, expression: Union[str, sp.Expr], segments: int, interval: Tuple[float, float],
                        variable: Union[str, sp.Symbol] = ProcessingConstants.DEFAULT_INPUT_SYMBOL,
                        parameters: Optional[Dict[str, float]] = None,
                        **kwargs) -> 'PiecewiseApproximator':
        """
        Build an approximator from a SymPy expression or expression string.
        Args:
            expression: Expression in a single variable, e.g. "2*x + 1"
            segments: Number of linear segments
            interval: (lo, hi) construction interval
            variable: Name or symbol of the independent variable
            parameters: Named constants substituted into the expression before sampling
            **kwargs: Forwarded to the constructor
        Raises:
            InvalidConstructionError: If the expression cannot be parsed or has unbound symbols
        """
        parameters = dict(parameters or {})
        symbol = sp.Symbol(variable) if isinstance(variable, str) else variable
        local_symbols = {name: sp.Symbol(name) for name in parameters}
        local_symbols[str(symbol)] = symbol
        try:
            expr = sp.sympify(expression, locals=local_symbols)
            expr = expr.subs({local_symbols[name]: sp.Float(value) for name, value in parameters.items()})
        except Exception as e:
            raise InvalidConstructionError(f"Cannot parse expression {expression!r}: {str(e)}") from e
        unbound = sorted(str(s) for s in expr.free_symbols if s != symbol)
        if unbound:
            raise InvalidConstructionError(
                f"Expression '{expr}' has unbound symbols {unbound}; only '{symbol}' is allowed")
        logger.debug("Lambdifying expression %s in %s", expr, symbol)
        function = sp.lambdify(symbol, expr, modules="numpy")
        kwargs.setdefault('name', str(expression))
        return cls(function, segments, interval, **kwargs)

    # --- Queries ---
    def evaluate_forward(self, x: float) -> float:
        """
        Approximate y = f(x).
        Raises:
            OutOfDomainError: If x is outside [lo, hi) or not finite
        """
        index = self._forward_table.find(x)
        if index is None:
            lo, hi = self._domain
            raise OutOfDomainError(ErrorMessages.OUT_OF_DOMAIN.format(value=x, lo=lo, hi=hi),
                                   value=x, domain=self._domain)
        return float(self._forward_table[index].evaluate(x))

    def evaluate_inverse(self, y: float) -> float:
        """
        Approximate the x for which f(x) = y.

        Candidates from overlapping inverse segments that agree within
        INVERSE_CANDIDATE_TOLERANCE (relative to the domain width) count as
        one, so a valley node shared by two segments resolves to its x.
        Raises:
            NonInvertibleSegmentError: If y is only reached through a flat segment
            AmbiguousInverseError: If y is reached at more than one distinct x
            OutOfRangeError: If no inverse segment contains y
        """
        matches = self._inverse_table.find_all(y)
        if not matches:
            tolerance = ProcessingConstants.FLAT_VALUE_TOLERANCE
            for index, (flat_lo, flat_hi) in zip(self._flat_segments, self._flat_ranges):
                if flat_lo - tolerance <= y <= flat_hi + tolerance:
                    lo = self._forward_table[index].lo
                    hi = self._forward_table[index].hi
                    raise NonInvertibleSegmentError(
                        f"y={y!r} is reached by every x in the flat segment [{lo}, {hi}); inverse is indeterminate",
                        value=y, segment_index=index)
            raise OutOfRangeError(ErrorMessages.OUT_OF_RANGE.format(value=y), value=y)
        candidates = []
        merge_tolerance = ProcessingConstants.INVERSE_CANDIDATE_TOLERANCE * (self._domain[1] - self._domain[0])
        for i in matches:
            x = float(self._inverse_table[i].evaluate(y))
            if not any(abs(x - c) <= merge_tolerance for c in candidates):
                candidates.append(x)
        if len(candidates) > 1:
            raise AmbiguousInverseError(
                f"y={y!r} is reached at {len(candidates)} points {candidates}; inverse is ambiguous",
                value=y, candidates=candidates)
        return candidates[0]

    def evaluate_forward_many(self, xs: Iterable[float]) -> np.ndarray:
        """Element-wise evaluate_forward; raises on the first value outside the domain."""
        arr = np.asarray(xs, dtype=float)
        return np.fromiter((self.evaluate_forward(float(x)) for x in arr.ravel()),
                           dtype=float, count=arr.size).reshape(arr.shape)

    def evaluate_inverse_many(self, ys: Iterable[float]) -> np.ndarray:
        """Element-wise evaluate_inverse; raises on the first value that cannot be inverted."""
        arr = np.asarray(ys, dtype=float)
        return np.fromiter((self.evaluate_inverse(float(y)) for y in arr.ravel()),
                           dtype=float, count=arr.size).reshape(arr.shape)

    def __call__(self, x: float) -> float:
        return self.evaluate_forward(x)

    # --- Symbolic export ---
    def to_piecewise(self, symbol: Union[str, sp.Symbol] = ProcessingConstants.DEFAULT_INPUT_SYMBOL) -> sp.Piecewise:
        """Return the forward table as a SymPy Piecewise in the given symbol."""
        return PiecewiseBuilder.build_from_segments(self._forward_table, symbol)

    def inverse_to_piecewise(self, symbol: Union[str, sp.Symbol] = ProcessingConstants.DEFAULT_OUTPUT_SYMBOL
                             ) -> sp.Piecewise:
        """Return the inverse table as a SymPy Piecewise in the given symbol."""
        return PiecewiseBuilder.build_from_segments(self._inverse_table, symbol)

    # --- Accessors ---
    @property
    def segments(self) -> int:
        return len(self._forward_table)

    @property
    def domain(self) -> Tuple[float, float]:
        """The half-open construction interval [lo, hi)."""
        return self._domain

    interval = domain

    @property
    def value_range(self) -> Tuple[float, float]:
        """Smallest and largest sampled function value."""
        return self._value_range

    @property
    def forward_table(self) -> SegmentTable:
        return self._forward_table

    @property
    def inverse_table(self) -> SegmentTable:
        return self._inverse_table

    @property
    def flat_segments(self) -> Tuple[int, ...]:
        """Indices of forward segments left out of the inverse table."""
        return self._flat_segments

    @property
    def flat_segment_policy(self) -> FlatSegmentPolicy:
        return self._flat_segment_policy

    @property
    def is_monotonic(self) -> bool:
        """True if every value in the inverse table maps back to a single x."""
        return not self._flat_segments and self._inverse_table.is_disjoint

    def __repr__(self) -> str:
        return (f"PiecewiseApproximator(name={self.name!r}, segments={self.segments}, "
                f"domain={self._domain}, flat_segments={len(self._flat_segments)})")
