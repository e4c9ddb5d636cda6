import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.gridspec import GridSpec

from pypiecewise.algorithms.approximator import PiecewiseApproximator
from pypiecewise.algorithms.deviation import sample_points
from pypiecewise.data.constants import ProcessingConstants

logger = logging.getLogger(__name__)


class ApproximationVisualizer:
    """Plots a piecewise approximation against its source function."""

    # --- Constructor ---
    def __init__(self, output_dir: Union[str, Path], enabled: bool = True) -> None:
        self.plot_directory = Path(output_dir)
        self.is_enabled = enabled
        self.setup_style()
        logger.debug("ApproximationVisualizer initialized (enabled=%s, output=%s)", enabled, self.plot_directory)

    @staticmethod
    def setup_style() -> None:
        plt.rcParams.update({
            'font.size': 10,
            'font.family': 'sans-serif',
            'font.sans-serif': ['DejaVu Sans', 'Arial', 'Helvetica', 'Liberation Sans'],
            'axes.titlesize': 12,
            'axes.labelsize': 10,
            'xtick.labelsize': 9,
            'ytick.labelsize': 9,
            'legend.fontsize': 9,
            'figure.titlesize': 14,
            'axes.grid': True,
            'grid.alpha': 0.3,
            'grid.linestyle': '--',
            'axes.axisbelow': True,
            'figure.facecolor': 'white',
            'axes.facecolor': 'white',
            'savefig.facecolor': 'white',
            'savefig.edgecolor': 'none',
        })

    def is_visualization_enabled(self) -> bool:
        return self.is_enabled

    # --- Public API Methods ---
    def plot_approximation(self, approximator: PiecewiseApproximator,
                           function: Optional[Callable[[float], float]] = None,
                           name: Optional[str] = None,
                           samples: int = ProcessingConstants.DEFAULT_VISUALIZATION_POINTS) -> Optional[Path]:
        """
        Plot the forward approximation and, if a source function is given, its deviation.
        Args:
            approximator: The approximation to plot
            function: Source function for comparison (optional)
            name: Label used in the title and file name (defaults to approximator.name)
            samples: Number of evaluation points over the domain
        Returns:
            Path of the saved PNG, or None when visualization is disabled
        """
        if not self.is_enabled:
            logger.debug("Visualization disabled, skipping plot for '%s'", name or approximator.name)
            return None
        name = name or approximator.name
        logger.info("Visualizing approximation '%s' (%d segments)", name, approximator.segments)
        xs = sample_points(approximator.domain, samples)
        approx_values = approximator.evaluate_forward_many(xs)
        rows = 2 if function is not None else 1
        fig = plt.figure(figsize=(10, 4 * rows))
        try:
            gs = GridSpec(rows, 1, figure=fig)
            ax = fig.add_subplot(gs[0, 0])
            ax.plot(xs, approx_values, color='#1f77b4', linewidth=1.5, label='piecewise approximation')
            nodes = [segment.lo for segment in approximator.forward_table] + [approximator.domain[1]]
            if len(nodes) <= ProcessingConstants.MAX_PLOTTED_NODES:
                node_values = [segment.evaluate(segment.lo) for segment in approximator.forward_table]
                node_values.append(approximator.forward_table[-1].evaluate(approximator.domain[1]))
                ax.scatter(nodes, node_values, s=12, color='#ff7f0e', zorder=3, label='segment nodes')
            if function is not None:
                true_values = np.array([float(function(float(x))) for x in xs])
                ax.plot(xs, true_values, color='#2ca02c', linestyle='--', linewidth=1.0, label='source function')
                ax_dev = fig.add_subplot(gs[1, 0])
                ax_dev.plot(xs, np.abs(approx_values - true_values), color='#d62728', linewidth=1.2)
                ax_dev.set_xlabel("x")
                ax_dev.set_ylabel("|approximation - f(x)|")
                ax_dev.set_title("Absolute deviation")
            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_title(f"{name} ({approximator.segments} segments)")
            ax.legend(loc='best', framealpha=0.9)
            fig.tight_layout()
            self.plot_directory.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in name)
            filepath = self.plot_directory / f"{safe_name}_approximation_{timestamp}.png"
            fig.savefig(str(filepath), dpi=150, bbox_inches="tight")
            logger.info("Approximation plot saved: %s", filepath)
            return filepath
        except Exception as e:
            logger.error("Unexpected error visualizing approximation '%s': %s", name, e, exc_info=True)
            raise ValueError(f"Unexpected error visualizing approximation {name}: {e}") from e
        finally:
            plt.close(fig)
