"""Tests for the generation pipeline."""

import logging
from pathlib import Path

import pytest

from enumgen.core import ir
from enumgen.core.errors import FormatError, ValidationError
from enumgen.emit.emitter import render
from enumgen.emit.generator import GeneratorResult, ModuleGenerator, atomic_write, generate_source


def _reject(source: str) -> str:
    raise FormatError("formatter rejected the text", source)


def test_generate_writes_output(tmp_path: Path, example_decls, caplog):
    output = tmp_path / "out" / "example.py"
    with caplog.at_level(logging.INFO, logger="enumgen.emit.generator"):
        result = ModuleGenerator(example_decls, output, formatter=None).generate()

    assert result.success
    assert result.files_created == [output]
    assert result.artifacts["enum_names"] == ["Example"]
    assert output.read_text() == render(example_decls)
    assert "Generating 1 enumerations for package 'example'" in caplog.text


def test_generate_applies_formatter(tmp_path: Path, example_decls):
    output = tmp_path / "example.py"
    result = ModuleGenerator(example_decls, output, formatter=str.upper).generate()
    assert result.success
    assert output.read_text() == render(example_decls).upper()


def test_dry_run_writes_nothing(tmp_path: Path, example_decls):
    output = tmp_path / "example.py"
    result = ModuleGenerator(example_decls, output, formatter=None, dry_run=True).generate()
    assert result.success
    assert result.files_created == []
    assert result.artifacts["source"] == render(example_decls)
    assert not output.exists()


def test_format_failure_keeps_unformatted_text(tmp_path: Path, example_decls):
    output = tmp_path / "example.py"
    output.write_text("previous contents\n")
    generator = ModuleGenerator(example_decls, output, formatter=_reject)

    result = generator.generate()

    assert not result.success
    assert result.errors == ["format: formatter rejected the text"]
    assert generator.unformatted_path == tmp_path / "example.py.unformatted"
    assert result.files_created == [generator.unformatted_path]
    assert generator.unformatted_path.read_text() == render(example_decls)
    assert output.read_text() == "previous contents\n"
    assert "source" not in result.artifacts


def test_format_failure_in_dry_run_writes_nothing(tmp_path: Path, example_decls):
    generator = ModuleGenerator(example_decls, tmp_path / "example.py", formatter=_reject, dry_run=True)
    result = generator.generate()
    assert not result.success
    assert result.files_created == []
    assert not generator.unformatted_path.exists()


def test_lint_warnings_are_collected(tmp_path: Path):
    decls = ir.DeclarationSet(
        package_name="pkg",
        enumerations=[
            ir.Enumeration(type_name="T", values=[ir.Enumerator(name="A", explicit_index=3)])
        ],
    )
    result = ModuleGenerator(decls, tmp_path / "t.py", formatter=None).generate()
    assert result.success
    assert len(result.warnings) == 1


def test_invalid_declarations_raise(tmp_path: Path):
    decls = ir.DeclarationSet(package_name="pkg")
    with pytest.raises(ValidationError):
        ModuleGenerator(decls, tmp_path / "t.py", formatter=None).generate()
    assert not (tmp_path / "t.py").exists()


def test_generate_source_without_formatter(example_decls):
    assert generate_source(example_decls, formatter=None) == render(example_decls)


def test_atomic_write_replaces_file(tmp_path: Path):
    target = tmp_path / "enums.py"
    target.write_text("old")
    atomic_write(target, "new")
    assert target.read_text() == "new"
    assert [p.name for p in tmp_path.iterdir()] == ["enums.py"]


def test_generator_result_success():
    result = GeneratorResult()
    assert result.success
    result.add_warning("careful")
    assert result.success
    result.add_error("broken")
    assert not result.success
