"""Shared pytest fixtures for enumgen tests."""

import types
from pathlib import Path

import pytest

from enumgen.core import ir
from enumgen.emit.emitter import render


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def example_decls() -> ir.DeclarationSet:
    """Return the Good/Bad/Ugly declaration set without optional features."""
    return ir.DeclarationSet(
        package_name="example",
        enumerations=[
            ir.Enumeration(
                type_name="Example",
                values=[
                    ir.Enumerator(name="Good"),
                    ir.Enumerator(name="Bad"),
                    ir.Enumerator(name="Ugly"),
                ],
            )
        ],
    )


def _load_generated(decls: ir.DeclarationSet, name: str = "generated") -> types.ModuleType:
    source = render(decls)
    module = types.ModuleType(name)
    exec(compile(source, f"<{name}>", "exec"), module.__dict__)
    return module


@pytest.fixture
def load_generated():
    """Return a function that renders a declaration set and executes it as a module."""
    return _load_generated
