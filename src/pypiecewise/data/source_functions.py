"""
Source function factories.

Each factory returns a plain closure taking and returning a float, ready to
be handed to PiecewiseApproximator.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Final

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockMagnet:
    """Geometry (mm) and remanence (mT) of a rectangular block magnet."""
    length: float
    width: float
    thickness: float
    remanence: float


# 3/4" x 3/8" x 1/16" N42 block magnet read by a DRV5056 Hall-effect sensor
DRV5056_DEMO_MAGNET: Final[BlockMagnet] = BlockMagnet(length=19.05, width=9.525, thickness=1.5875,
                                                      remanence=1320.0)


def linear_function(slope: float, intercept: float = 0.0) -> Callable[[float], float]:
    """Return f(x) = slope * x + intercept."""
    def _linear(x: float) -> float:
        return slope * x + intercept
    _linear.__name__ = f"linear({slope}, {intercept})"
    return _linear


def block_magnet_flux_density(length: float, width: float, thickness: float,
                              remanence: float) -> Callable[[float], float]:
    """
    Return the on-axis flux density B(d) of a block magnet at distance d from its face.

    B(d) = Br/pi * (atan(W*L / (2d*sqrt(4d^2 + W^2 + L^2)))
                    - atan(W*L / (2(d+T)*sqrt(4(d+T)^2 + W^2 + L^2))))

    This is the formula from the DRV5056 data sheet. atan2 is used so that
    B(0) is defined (the first term tends to pi/2 at the magnet face).
    Args:
        length: Magnet length L (mm)
        width: Magnet width W (mm)
        thickness: Magnet thickness T (mm)
        remanence: Remanence Br (mT)
    Returns:
        Closure mapping distance (mm, >= 0) to flux density (mT)
    """
    for label, value in (("length", length), ("width", width), ("thickness", thickness), ("remanence", remanence)):
        if not value > 0:
            raise ValueError(f"Magnet {label} must be positive, got {value}")
    face_area = width * length
    diagonal_sq = width ** 2 + length ** 2
    logger.debug("Block magnet flux density: L=%.4g W=%.4g T=%.4g Br=%.4g",
                 length, width, thickness, remanence)

    def _term(d: float) -> float:
        return math.atan2(face_area, 2 * d * math.sqrt(4 * d ** 2 + diagonal_sq))

    def _flux_density(d: float) -> float:
        return remanence / math.pi * (_term(d) - _term(d + thickness))

    _flux_density.__name__ = "block_magnet_flux_density"
    return _flux_density


def drv5056_demo_flux_density() -> Callable[[float], float]:
    """Flux density closure for DRV5056_DEMO_MAGNET."""
    magnet = DRV5056_DEMO_MAGNET
    return block_magnet_flux_density(magnet.length, magnet.width, magnet.thickness, magnet.remanence)
