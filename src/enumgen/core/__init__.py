"""
Core of enumgen: declaration model, loading, and validation.
"""

from . import ir
from .config_loader import config_from_file, load_config, parse_config
from .errors import (
    ConfigError,
    EmitError,
    EnumgenError,
    ErrorContext,
    FormatError,
    ValidationError,
)
from .extractor import config_from_python_file, config_from_source, extract_declarations, load_package
from .validator import check, lint

__all__ = [
    "ir",
    # Loading
    "parse_config",
    "config_from_file",
    "load_config",
    "extract_declarations",
    "config_from_source",
    "config_from_python_file",
    "load_package",
    # Validation
    "check",
    "lint",
    # Errors
    "EnumgenError",
    "ConfigError",
    "ValidationError",
    "EmitError",
    "FormatError",
    "ErrorContext",
]
