"""Validation utilities for approximation configurations."""

from .config_validator import validate_config, validate_function_section

__all__ = [
    "validate_config",
    "validate_function_section"
]
