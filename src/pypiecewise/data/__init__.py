"""
Constants, source functions and bundled configurations.

This package provides the processing constants, ready-made source function
factories (including the block-magnet flux density used with the DRV5056
Hall-effect sensor) and example YAML approximation configurations.
"""

from pathlib import Path

from .constants.processing_constants import ProcessingConstants, ErrorMessages
from .source_functions import (BlockMagnet, DRV5056_DEMO_MAGNET, linear_function, block_magnet_flux_density,
                               drv5056_demo_flux_density)

CONFIG_DIRECTORY = Path(__file__).parent / "configs"

__all__ = [
    "ProcessingConstants",
    "ErrorMessages",
    "BlockMagnet",
    "DRV5056_DEMO_MAGNET",
    "linear_function",
    "block_magnet_flux_density",
    "drv5056_demo_flux_density",
    "CONFIG_DIRECTORY"
]
