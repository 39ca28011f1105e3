"""
enumgen - generate Python enumeration types from declarations.

Enumerations are described by a YAML configuration (or by annotated comments
in Python source) and emitted as one Python module. Each generated type wraps
a private small-integer index: values compare by index, work as dict keys,
and the zero value is the invalid (unset) enumerator.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.config_loader import load_config, parse_config
from .core.errors import ConfigError, EmitError, EnumgenError, FormatError, ValidationError
from .core.validator import check
from .emit.emitter import render
from .emit.generator import ModuleGenerator, generate_source

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "load_config",
    "parse_config",
    "check",
    "render",
    "generate_source",
    "ModuleGenerator",
    "EnumgenError",
    "ConfigError",
    "ValidationError",
    "EmitError",
    "FormatError",
]
