"""Demonstration script: distance to a block magnet from Hall-sensor flux density."""
import logging
from pathlib import Path

from pypiecewise import (PiecewiseApproximator, ApproximationVisualizer, OutOfDomainError, OutOfRangeError,
                         create_approximator, max_forward_deviation, max_round_trip_error)
from pypiecewise.data import CONFIG_DIRECTORY, drv5056_demo_flux_density, linear_function


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s -> %(message)s"
    )
    # Silence noisy libraries
    logging.getLogger('matplotlib').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)
    logging.getLogger('fontTools').setLevel(logging.WARNING)


def check_linear_source():
    """A linear source is reproduced exactly and rejects x = hi."""
    approx = PiecewiseApproximator(linear_function(2.0), 1, (0.0, 5.0))
    print(f"forward(1) = {approx.evaluate_forward(1.0)}  (expected 2.0)")
    print(f"forward(0) = {approx.evaluate_forward(0.0)}  (expected 0.0)")
    try:
        approx.evaluate_forward(5.0)
    except OutOfDomainError as e:
        print(f"forward(5) rejected: {e}")


def demonstrate_magnet_distance():
    """Approximate flux density over 0-16 mm and invert it to recover distances."""
    setup_logging()
    print(f"\n{'=' * 80}")
    print("LINEAR SOURCE")
    print(f"{'=' * 80}")
    check_linear_source()

    flux_density = drv5056_demo_flux_density()
    approx = create_approximator(CONFIG_DIRECTORY / "drv5056_block_magnet.yaml")
    print(f"\n{'=' * 80}")
    print(f"BLOCK MAGNET: {approx}")
    print(f"{'=' * 80}")
    for distance in (0.5, 2.0, 5.0, 10.0, 14.0, 15.9):
        measured = flux_density(distance)
        try:
            recovered = approx.evaluate_inverse(measured)
            print(f"d={distance:5.2f} mm -> B={measured:9.4f} mT -> d={recovered:8.4f} mm "
                  f"(error {abs(recovered - distance):.2e} mm)")
        except OutOfRangeError as e:
            print(f"d={distance:5.2f} mm -> B={measured:9.4f} mT -> not invertible: {e}")
    print(f"Max forward deviation: {max_forward_deviation(approx, flux_density):.3e} mT")
    print(f"Max round-trip error:  {max_round_trip_error(approx):.3e} mm")

    plot_dir = Path(__file__).parent / "pypiecewise_plots"
    path = ApproximationVisualizer(plot_dir).plot_approximation(approx, flux_density)
    print(f"Plot saved to {path}")


if __name__ == "__main__":
    demonstrate_magnet_distance()
