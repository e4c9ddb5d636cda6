"""Shared pytest fixtures for pypiecewise tests."""
import matplotlib
matplotlib.use("Agg")

import pytest
from pathlib import Path

from pypiecewise.algorithms.approximator import PiecewiseApproximator
from pypiecewise.data import CONFIG_DIRECTORY
from pypiecewise.data.source_functions import drv5056_demo_flux_density, linear_function


@pytest.fixture
def doubling_function():
    """f(x) = 2x."""
    return linear_function(2.0)


@pytest.fixture
def doubling_approximator(doubling_function):
    """Single-segment approximation of 2x over [0, 5)."""
    return PiecewiseApproximator(doubling_function, 1, (0.0, 5.0))


@pytest.fixture
def flux_density():
    """Flux density of the DRV5056 demo magnet as a function of distance."""
    return drv5056_demo_flux_density()


@pytest.fixture
def magnet_approximator(flux_density):
    """100-segment approximation of the magnet flux density over [0, 16) mm."""
    return PiecewiseApproximator(flux_density, 100, (0.0, 16.0))


@pytest.fixture
def clamp_function():
    """Rises linearly to 1 over [0, 1], then stays flat."""
    return lambda x: min(x, 1.0)


@pytest.fixture
def parabola_function():
    """f(x) = x^2, not monotonic over an interval containing 0."""
    return lambda x: x * x


@pytest.fixture
def magnet_yaml_path():
    """Path to the bundled DRV5056 magnet configuration."""
    return CONFIG_DIRECTORY / "drv5056_block_magnet.yaml"


@pytest.fixture
def write_yaml(tmp_path):
    """Write YAML text to a temporary file and return its path."""
    def _write(content: str, name: str = "approximation.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write
