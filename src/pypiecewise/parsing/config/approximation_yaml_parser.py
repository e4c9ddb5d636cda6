import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from ruamel.yaml import YAML, constructor
from ruamel.yaml.error import YAMLError

from pypiecewise.algorithms.approximator import PiecewiseApproximator
from pypiecewise.core.exceptions import ConfigurationError
from pypiecewise.data.constants import ProcessingConstants
from pypiecewise.parsing.config.yaml_keys import (NAME_KEY, FUNCTION_KEY, SEGMENTS_KEY, INTERVAL_KEY,
                                                  FLAT_SEGMENTS_KEY, SLOPE_TOLERANCE_KEY, EXPRESSION_KEY,
                                                  VARIABLE_KEY, PARAMETERS_KEY, SKIP_KEY)
from pypiecewise.parsing.validation.config_validator import validate_config

logger = logging.getLogger(__name__)


class BaseFileParser:
    """Base class for parsing configuration files."""

    def __init__(self, config_path: Union[str, Path]) -> None:
        self.config_path = Path(config_path)
        self.config = self._load_config()
        logger.info("Successfully loaded configuration from: %s", self.config_path)

    def _load_config(self) -> Dict[str, Any]:
        raise NotImplementedError("Subclasses must implement _load_config method")


class YAMLFileParser(BaseFileParser):
    """Parser for YAML configuration files."""

    def _load_config(self) -> Dict[str, Any]:
        yaml = YAML(typ='safe')
        yaml.allow_duplicate_keys = False
        try:
            logger.debug("Loading YAML file: %s", self.config_path)
            with open(self.config_path, 'r') as f:
                config = yaml.load(f)
            logger.debug("YAML file loaded successfully, found %d top-level keys", len(config) if config else 0)
        except FileNotFoundError as e:
            logger.error("YAML file not found: %s", self.config_path)
            raise FileNotFoundError(f"YAML file not found: {self.config_path}") from e
        except constructor.DuplicateKeyError as e:
            logger.error("Duplicate key found in YAML file %s: %s", self.config_path, e)
            raise ConfigurationError(f"Duplicate key in {self.config_path}: {str(e)}") from e
        except YAMLError as e:
            logger.error("YAML syntax error in file %s: %s", self.config_path, e)
            raise ConfigurationError(f"YAML syntax error in {self.config_path}: {str(e)}") from e
        if config is None:
            raise ConfigurationError(f"YAML file is empty: {self.config_path}")
        return config


class ApproximationYAMLParser(YAMLFileParser):
    """Parser for approximation configuration files in YAML format."""

    def __init__(self, yaml_path: Union[str, Path]) -> None:
        super().__init__(yaml_path)
        validate_config(self.config)

    # --- Configuration accessors ---
    @property
    def name(self) -> str:
        return self.config.get(NAME_KEY, self.config_path.stem)

    @property
    def expression(self) -> str:
        return str(self.config[FUNCTION_KEY][EXPRESSION_KEY])

    @property
    def variable(self) -> str:
        return self.config[FUNCTION_KEY].get(VARIABLE_KEY, ProcessingConstants.DEFAULT_INPUT_SYMBOL)

    @property
    def parameters(self) -> Dict[str, float]:
        parameters = self.config[FUNCTION_KEY].get(PARAMETERS_KEY) or {}
        return {name: float(value) for name, value in parameters.items()}

    @property
    def segments(self) -> int:
        return int(self.config[SEGMENTS_KEY])

    @property
    def interval(self) -> Tuple[float, float]:
        lo, hi = self.config[INTERVAL_KEY]
        return float(lo), float(hi)

    @property
    def flat_segment_policy(self) -> str:
        return self.config.get(FLAT_SEGMENTS_KEY, SKIP_KEY)

    @property
    def slope_tolerance(self) -> float:
        return float(self.config.get(SLOPE_TOLERANCE_KEY, ProcessingConstants.SLOPE_TOLERANCE))

    # --- Approximator creation ---
    def create_approximator(self) -> PiecewiseApproximator:
        """Build the approximator described by the configuration."""
        logger.info("Creating approximator '%s' from %s", self.name, self.config_path)
        return PiecewiseApproximator.from_expression(
            self.expression, self.segments, self.interval,
            variable=self.variable,
            parameters=self.parameters,
            flat_segment_policy=self.flat_segment_policy,
            slope_tolerance=self.slope_tolerance,
            name=self.name)
