"""
Generation pipeline: validate, render, format, write.

ModuleGenerator drives one generation run for a DeclarationSet and records
what happened in a GeneratorResult:

    result = ModuleGenerator(decls, Path("enums.py")).generate()
    if not result.success:
        ...

If the formatter rejects the generated text, the unformatted text is
written next to the output as "<output>.unformatted" for debugging. The
output file itself only ever receives formatted text.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core import ir
from ..core.errors import FormatError
from ..core.validator import check, lint
from .emitter import render
from .formatting import format_source

logger = logging.getLogger(__name__)

Formatter = Callable[[str], str]

UNFORMATTED_SUFFIX = ".unformatted"


@dataclass
class GeneratorResult:
    """
    Result from a generation run.

    Attributes:
        files_created: Paths written by the run
        artifacts: Data produced by the run ("enum_names", "source")
        errors: Errors that made the run fail
        warnings: Lint warnings to display to the user
    """

    files_created: list[Path] = field(default_factory=list)
    artifacts: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether generation succeeded (no errors)."""
        return len(self.errors) == 0

    def add_file(self, path: Path) -> None:
        """Record a file that was written."""
        self.files_created.append(path)

    def add_artifact(self, key: str, value: Any) -> None:
        """Record data produced by the run."""
        self.artifacts[key] = value

    def add_error(self, error: str) -> None:
        """Record an error."""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """Record a warning."""
        self.warnings.append(warning)


def atomic_write(path: Path, content: str) -> None:
    """
    Write content to path atomically: write a temp file in the same
    directory, then replace the target. A failed run never leaves a
    truncated file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=path.suffix)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def generate_source(decls: ir.DeclarationSet, formatter: Formatter | None = format_source) -> str:
    """
    Validate and render decls, then format the result.

    Args:
        decls: Declaration set
        formatter: Canonicalizes the raw text; None skips formatting

    Returns:
        Module source text

    Raises:
        ValidationError: If decls is invalid
        FormatError: If the formatter rejects the rendered text
    """
    source = render(decls)
    if formatter is None:
        return source
    return formatter(source)


class ModuleGenerator:
    """
    Generate one Python module from a DeclarationSet.

    Example:
        generator = ModuleGenerator(decls, Path("colors.py"))
        result = generator.generate()
        for warning in result.warnings:
            print(warning)
    """

    def __init__(
        self,
        decls: ir.DeclarationSet,
        output: Path,
        formatter: Formatter | None = format_source,
        dry_run: bool = False,
    ):
        """
        Initialize generator.

        Args:
            decls: Declarations to generate
            output: Path of the module to write
            formatter: Canonicalizes the raw text; None skips formatting
            dry_run: Render and format, but write nothing
        """
        self.decls = decls
        self.output = Path(output)
        self.formatter = formatter
        self.dry_run = dry_run

    @property
    def unformatted_path(self) -> Path:
        """Where unformatted text is written when formatting fails."""
        return self.output.with_name(self.output.name + UNFORMATTED_SUFFIX)

    def generate(self) -> GeneratorResult:
        """
        Run the pipeline.

        Returns:
            GeneratorResult; formatting failures are recorded as errors

        Raises:
            ValidationError: If the declarations are invalid
            EmitError: If rendering breaks an internal invariant
        """
        result = GeneratorResult()
        check(self.decls)
        for warning in lint(self.decls):
            result.add_warning(warning)

        logger.info(
            "Generating %d enumerations for package %r",
            len(self.decls.enumerations),
            self.decls.package_name,
        )
        result.add_artifact("enum_names", [e.type_name for e in self.decls.enumerations])

        try:
            source = generate_source(self.decls, self.formatter)
        except FormatError as e:
            result.add_error(f"format: {e}")
            if not self.dry_run:
                atomic_write(self.unformatted_path, e.source)
                result.add_file(self.unformatted_path)
                logger.error("Unformatted output written to %s", self.unformatted_path)
            return result

        result.add_artifact("source", source)
        if self.dry_run:
            logger.info("Dry run: not writing %s", self.output)
            return result

        atomic_write(self.output, source)
        result.add_file(self.output)
        logger.info("Wrote %s", self.output)
        return result
