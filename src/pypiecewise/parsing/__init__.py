"""
Parsing and configuration modules for pypiecewise.

This package handles YAML parsing and validation of approximation
configurations and approximator creation from configuration files.
"""

from .api import create_approximator, validate_yaml_file, get_approximator_info
from .config.approximation_yaml_parser import ApproximationYAMLParser
from .validation.config_validator import validate_config

__all__ = [
    'create_approximator',
    'validate_yaml_file',
    'get_approximator_info',
    'ApproximationYAMLParser',
    'validate_config'
]
