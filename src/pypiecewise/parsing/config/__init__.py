"""YAML configuration loading for approximation definitions."""

from .approximation_yaml_parser import YAMLFileParser, ApproximationYAMLParser

__all__ = [
    "YAMLFileParser",
    "ApproximationYAMLParser"
]
