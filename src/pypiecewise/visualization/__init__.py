"""Visualization of piecewise approximations."""

from .plotters import ApproximationVisualizer

__all__ = ["ApproximationVisualizer"]
