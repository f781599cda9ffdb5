"""
Configuration management package for KPHP Inspector.

This package provides configuration parsing, validation, and management
functionality for the inspector and the tree comparator.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    load_diff_config,
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'load_diff_config',
]
