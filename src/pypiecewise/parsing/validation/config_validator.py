import logging
import math
import numbers
from difflib import get_close_matches
from typing import Any, Dict

from pypiecewise.core.exceptions import ConfigurationError
from pypiecewise.core.segments import FlatSegmentPolicy
from pypiecewise.data.constants import ProcessingConstants
from pypiecewise.parsing.config.yaml_keys import (NAME_KEY, FUNCTION_KEY, SEGMENTS_KEY, INTERVAL_KEY,
                                                  FLAT_SEGMENTS_KEY, SLOPE_TOLERANCE_KEY, EXPRESSION_KEY,
                                                  VARIABLE_KEY, PARAMETERS_KEY)

logger = logging.getLogger(__name__)

REQUIRED_KEYS = frozenset({FUNCTION_KEY, SEGMENTS_KEY, INTERVAL_KEY})
OPTIONAL_KEYS = frozenset({NAME_KEY, FLAT_SEGMENTS_KEY, SLOPE_TOLERANCE_KEY})
FUNCTION_REQUIRED_KEYS = frozenset({EXPRESSION_KEY})
FUNCTION_OPTIONAL_KEYS = frozenset({VARIABLE_KEY, PARAMETERS_KEY})


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_keys(section: Dict[str, Any], required: frozenset, optional: frozenset, where: str) -> None:
    valid = required | optional
    for key in section:
        if key not in valid:
            suggestions = get_close_matches(str(key), sorted(valid), n=1, cutoff=0.6)
            message = f"Unknown key '{key}' in {where}"
            if suggestions:
                message += f". Did you mean '{suggestions[0]}'?"
            message += f"\nValid keys: {', '.join(sorted(valid))}"
            raise ConfigurationError(message, key=str(key))
    missing = sorted(required - set(section))
    if missing:
        raise ConfigurationError(f"Missing required key(s) in {where}: {', '.join(missing)}", key=missing[0])


def validate_function_section(function_config: Any) -> None:
    """Validate the 'function' section: expression, optional variable and parameters."""
    if not isinstance(function_config, dict):
        raise ConfigurationError(f"'{FUNCTION_KEY}' must be a mapping, got {type(function_config).__name__}",
                                 key=FUNCTION_KEY)
    _check_keys(function_config, FUNCTION_REQUIRED_KEYS, FUNCTION_OPTIONAL_KEYS, f"'{FUNCTION_KEY}'")
    expression = function_config[EXPRESSION_KEY]
    if not isinstance(expression, (str, numbers.Real)) or isinstance(expression, bool) \
            or (isinstance(expression, str) and not expression.strip()):
        raise ConfigurationError(f"'{EXPRESSION_KEY}' must be a non-empty expression string", key=EXPRESSION_KEY)
    variable = function_config.get(VARIABLE_KEY, ProcessingConstants.DEFAULT_INPUT_SYMBOL)
    if not isinstance(variable, str) or not variable.isidentifier():
        raise ConfigurationError(f"'{VARIABLE_KEY}' must be a valid identifier, got {variable!r}", key=VARIABLE_KEY)
    parameters = function_config.get(PARAMETERS_KEY, {}) or {}
    if not isinstance(parameters, dict):
        raise ConfigurationError(f"'{PARAMETERS_KEY}' must be a mapping of names to numbers", key=PARAMETERS_KEY)
    for name, value in parameters.items():
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigurationError(f"Parameter name {name!r} is not a valid identifier", key=PARAMETERS_KEY)
        if name == variable:
            raise ConfigurationError(f"Parameter '{name}' shadows the function variable", key=PARAMETERS_KEY)
        if not _is_number(value) or not math.isfinite(value):
            raise ConfigurationError(f"Parameter '{name}' must be a finite number, got {value!r}",
                                     key=PARAMETERS_KEY)


def validate_config(config: Any) -> None:
    """
    Validate an approximation configuration loaded from YAML.
    Raises:
        ConfigurationError: Naming the first offending key
    """
    logger.debug("Validating approximation configuration")
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(config).__name__}")
    _check_keys(config, REQUIRED_KEYS, OPTIONAL_KEYS, "configuration")
    validate_function_section(config[FUNCTION_KEY])
    segments = config[SEGMENTS_KEY]
    if not isinstance(segments, int) or isinstance(segments, bool) or segments < ProcessingConstants.MIN_SEGMENTS:
        raise ConfigurationError(
            f"'{SEGMENTS_KEY}' must be an integer >= {ProcessingConstants.MIN_SEGMENTS}, got {segments!r}",
            key=SEGMENTS_KEY)
    interval = config[INTERVAL_KEY]
    if not isinstance(interval, (list, tuple)) or len(interval) != 2 \
            or not all(_is_number(v) and math.isfinite(v) for v in interval):
        raise ConfigurationError(f"'{INTERVAL_KEY}' must be a list of two finite numbers, got {interval!r}",
                                 key=INTERVAL_KEY)
    if interval[0] >= interval[1]:
        raise ConfigurationError(f"'{INTERVAL_KEY}' lower bound must be less than upper bound, got {interval!r}",
                                 key=INTERVAL_KEY)
    if FLAT_SEGMENTS_KEY in config:
        valid_policies = [p.value for p in FlatSegmentPolicy]
        if config[FLAT_SEGMENTS_KEY] not in valid_policies:
            raise ConfigurationError(
                f"'{FLAT_SEGMENTS_KEY}' must be one of {valid_policies}, got {config[FLAT_SEGMENTS_KEY]!r}",
                key=FLAT_SEGMENTS_KEY)
    if SLOPE_TOLERANCE_KEY in config:
        tolerance = config[SLOPE_TOLERANCE_KEY]
        if not _is_number(tolerance) or not math.isfinite(tolerance) or tolerance < 0:
            raise ConfigurationError(f"'{SLOPE_TOLERANCE_KEY}' must be a finite number >= 0, got {tolerance!r}",
                                     key=SLOPE_TOLERANCE_KEY)
    if NAME_KEY in config and not isinstance(config[NAME_KEY], str):
        raise ConfigurationError(f"'{NAME_KEY}' must be a string", key=NAME_KEY)
    logger.debug("Configuration is valid")
