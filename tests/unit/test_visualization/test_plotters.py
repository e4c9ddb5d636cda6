"""Unit tests for visualization plotters."""

import pytest

from pypiecewise.visualization.plotters import ApproximationVisualizer


class TestApproximationVisualizer:
    """Test cases for ApproximationVisualizer."""

    def test_enabled_by_default(self, tmp_path):
        visualizer = ApproximationVisualizer(tmp_path)
        assert visualizer.is_visualization_enabled() is True

    def test_disabled_returns_none(self, tmp_path, doubling_approximator):
        plot_dir = tmp_path / "plots"
        visualizer = ApproximationVisualizer(plot_dir, enabled=False)
        assert visualizer.plot_approximation(doubling_approximator) is None
        assert not plot_dir.exists()

    def test_plot_with_source_function(self, tmp_path, magnet_approximator, flux_density):
        plot_dir = tmp_path / "plots"
        path = ApproximationVisualizer(plot_dir).plot_approximation(magnet_approximator, flux_density,
                                                                    samples=200)
        assert path.exists()
        assert path.suffix == ".png"
        assert path.parent == plot_dir
        assert path.name.startswith("block_magnet_flux_density_approximation_")

    def test_plot_without_source_function(self, tmp_path, doubling_approximator):
        path = ApproximationVisualizer(tmp_path).plot_approximation(doubling_approximator, name="2*x / test")
        assert path.exists()
        assert path.name.startswith("2_x___test_approximation_")

    def test_plot_error_is_wrapped(self, tmp_path, doubling_approximator):
        def failing(x):
            raise RuntimeError("boom")

        with pytest.raises(ValueError, match="Unexpected error visualizing approximation"):
            ApproximationVisualizer(tmp_path).plot_approximation(doubling_approximator, failing)
