"""
Emission of Python source for enumeration declarations.

Provides:
- render: DeclarationSet -> raw module text
- format_source: syntax check and ruff formatting
- ModuleGenerator: validate, render, format, and write one module
"""

from .emitter import render, render_enumeration
from .formatting import format_source
from .generator import GeneratorResult, ModuleGenerator, atomic_write, generate_source
from .labels import LabelTable, build_label_table, storage_width
from .strategies import STRATEGIES, EmissionStrategy

__all__ = [
    "render",
    "render_enumeration",
    "format_source",
    "generate_source",
    "atomic_write",
    "ModuleGenerator",
    "GeneratorResult",
    "LabelTable",
    "build_label_table",
    "storage_width",
    "EmissionStrategy",
    "STRATEGIES",
]
