"""Unit tests for deviation analysis."""

import numpy as np
import pytest

from pypiecewise.algorithms.approximator import PiecewiseApproximator
from pypiecewise.algorithms.deviation import (sample_points, max_forward_deviation, max_round_trip_error,
                                              find_segment_count)


class TestSamplePoints:
    """Test cases for sample_points."""

    def test_half_open_domain(self):
        np.testing.assert_allclose(sample_points((0.0, 1.0), 4), [0.0, 0.25, 0.5, 0.75])

    def test_invalid_count(self):
        with pytest.raises(ValueError, match="at least 1"):
            sample_points((0.0, 1.0), 0)


class TestForwardDeviation:
    """Test cases for max_forward_deviation."""

    def test_linear_source_has_no_deviation(self, doubling_approximator, doubling_function):
        assert max_forward_deviation(doubling_approximator, doubling_function) == pytest.approx(0.0, abs=1e-12)

    def test_quadratic_deviation_bound(self, parabola_function):
        # Chord error of x^2 is at most h^2 / 4
        approximator = PiecewiseApproximator(parabola_function, 10, (0.0, 1.0))
        deviation = max_forward_deviation(approximator, parabola_function)
        assert 0.0 < deviation <= 0.01 / 4 + 1e-12

    def test_magnet_deviation_decreases_with_segments(self, flux_density):
        deviations = [max_forward_deviation(PiecewiseApproximator(flux_density, n, (0.0, 16.0)), flux_density)
                      for n in (4, 8, 16, 32, 64)]
        assert all(a > b for a, b in zip(deviations, deviations[1:]))


class TestRoundTrip:
    """Test cases for max_round_trip_error."""

    def test_linear_round_trip(self, doubling_approximator):
        assert max_round_trip_error(doubling_approximator) == pytest.approx(0.0, abs=1e-12)

    def test_monotonic_round_trip(self, magnet_approximator):
        assert max_round_trip_error(magnet_approximator, samples=500) < 1e-9

    def test_ambiguous_points_are_skipped(self, parabola_function):
        # Only the valley at x = 0 resolves; every other value is reached twice
        approximator = PiecewiseApproximator(parabola_function, 4, (-1.0, 1.0))
        assert max_round_trip_error(approximator, samples=50) == pytest.approx(0.0, abs=1e-12)


class TestFindSegmentCount:
    """Test cases for find_segment_count."""

    def test_quadratic(self, parabola_function):
        assert find_segment_count(parabola_function, (0.0, 1.0), 1e-3) == 16

    def test_linear_needs_one_segment(self, doubling_function):
        assert find_segment_count(doubling_function, (0.0, 5.0), 1e-9) == 1

    def test_not_reached(self, parabola_function):
        with pytest.raises(ValueError, match="not reached"):
            find_segment_count(parabola_function, (0.0, 1.0), 1e-9, max_segments=8)

    @pytest.mark.parametrize("tolerance", [0.0, -1.0])
    def test_invalid_tolerance(self, parabola_function, tolerance):
        with pytest.raises(ValueError, match="positive"):
            find_segment_count(parabola_function, (0.0, 1.0), tolerance)
