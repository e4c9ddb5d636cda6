import logging
from pathlib import Path
from typing import Union

from pypiecewise.algorithms.approximator import PiecewiseApproximator
from pypiecewise.core.exceptions import ConfigurationError
from pypiecewise.parsing.config.approximation_yaml_parser import ApproximationYAMLParser

logger = logging.getLogger(__name__)


def create_approximator(yaml_path: Union[str, Path]) -> PiecewiseApproximator:
    """
    Create a piecewise approximator from a YAML configuration file.

    This function serves as the main entry point for building approximators
    from configuration files. The file names the source expression, its
    variable and constants, the segment count and the interval.
    Args:
        yaml_path: Path to the YAML configuration file
    Returns:
        The fully built approximator
    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the YAML content is invalid
        InvalidConstructionError: If the described function cannot be approximated
    Examples:
        approximator = create_approximator('drv5056_block_magnet.yaml')
        distance = approximator.evaluate_inverse(12.273)
    """
    logger.info("Creating approximator from: %s", yaml_path)
    try:
        parser = ApproximationYAMLParser(yaml_path)
        approximator = parser.create_approximator()
        logger.info("Successfully created approximator: %s", approximator)
        return approximator
    except Exception as e:
        logger.error("Failed to create approximator from %s: %s", yaml_path, e, exc_info=True)
        raise


def validate_yaml_file(yaml_path: Union[str, Path]) -> bool:
    """
    Validate a YAML file without building the approximator.
    Args:
        yaml_path: Path to the YAML configuration file to validate
    Returns:
        True if the file is valid
    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the YAML content is invalid
    """
    logger.info("Validating YAML file: %s", yaml_path)
    try:
        _ = ApproximationYAMLParser(yaml_path)
        logger.info("YAML validation successful for: %s", yaml_path)
        return True
    except FileNotFoundError as e:
        logger.error("YAML file not found: %s", yaml_path)
        raise FileNotFoundError(f"YAML file not found: {yaml_path}") from e
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error("Unexpected error validating YAML %s: %s", yaml_path, e, exc_info=True)
        raise ConfigurationError(f"Unexpected error validating YAML: {str(e)}") from e


def get_approximator_info(yaml_path: Union[str, Path]) -> dict:
    """
    Get basic information about an approximation configuration without building it.
    Example:
        info = get_approximator_info('drv5056_block_magnet.yaml')
        print(f"{info['name']}: {info['segments']} segments over {info['interval']}")
    """
    parser = ApproximationYAMLParser(yaml_path)
    return {
        'name': parser.name,
        'expression': parser.expression,
        'variable': parser.variable,
        'parameters': parser.parameters,
        'segments': parser.segments,
        'interval': parser.interval,
        'flat_segments': parser.flat_segment_policy,
        'slope_tolerance': parser.slope_tolerance,
    }
