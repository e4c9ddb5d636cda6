"""End-to-end tests: configuration file to distance estimates and plots."""

import numpy as np
import pytest
import sympy as sp

from pypiecewise import (create_approximator, max_forward_deviation, max_round_trip_error, find_segment_count,
                         PiecewiseApproximator, ApproximationVisualizer, OutOfDomainError, OutOfRangeError)


class TestMagnetDistanceWorkflow:
    """Recover the distance to a magnet from a measured flux density."""

    def test_distance_from_flux_density(self, magnet_yaml_path, flux_density):
        approximator = create_approximator(magnet_yaml_path)
        for distance in (0.5, 2.0, 6.25, 12.0):
            measured = flux_density(distance)
            assert approximator.evaluate_inverse(measured) == pytest.approx(distance, abs=0.05)

    def test_forward_deviation_is_small(self, magnet_yaml_path, flux_density):
        approximator = create_approximator(magnet_yaml_path)
        assert max_forward_deviation(approximator, flux_density) < 0.5
        assert max_round_trip_error(approximator) < 1e-9

    def test_queries_outside_the_tables(self, magnet_yaml_path):
        approximator = create_approximator(magnet_yaml_path)
        with pytest.raises(OutOfDomainError):
            approximator.evaluate_forward(16.0)
        with pytest.raises(OutOfRangeError):
            approximator.evaluate_inverse(1000.0)

    def test_vectorized_inverse(self, magnet_yaml_path, flux_density):
        approximator = create_approximator(magnet_yaml_path)
        distances = np.array([[1.0, 2.0], [4.0, 8.0]])
        measured = np.vectorize(flux_density)(distances)
        np.testing.assert_allclose(approximator.evaluate_inverse_many(measured), distances, atol=0.05)

    def test_plot(self, tmp_path, magnet_yaml_path, flux_density):
        approximator = create_approximator(magnet_yaml_path)
        path = ApproximationVisualizer(tmp_path).plot_approximation(approximator, flux_density)
        assert path.exists()


class TestTunedApproximation:
    """Pick a segment count for a target accuracy, then export the result."""

    def test_tuned_symbolic_export(self, parabola_function):
        segments = find_segment_count(parabola_function, (0.0, 1.0), 1e-3)
        approximator = PiecewiseApproximator(parabola_function, segments, (0.0, 1.0))
        x = sp.Symbol('x')
        forward = sp.lambdify(x, approximator.to_piecewise(x), modules="numpy")
        for value in (0.1, 0.37, 0.99):
            assert float(forward(value)) == pytest.approx(approximator.evaluate_forward(value))
            assert float(forward(value)) == pytest.approx(value ** 2, abs=1e-3)
