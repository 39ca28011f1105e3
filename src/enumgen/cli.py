"""
enumgen command line interface.

Commands:
- generate: write a Python module for a configuration
- check: validate a configuration and report lint warnings
- inspect: summarize the enumerations of a configuration

Without --config, the configuration is read from the enumgen annotations
of the Python files in the current directory.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from enumgen._version import get_version
from enumgen.core import ir
from enumgen.core.config_loader import load_config
from enumgen.core.errors import EnumgenError
from enumgen.core.extractor import load_package
from enumgen.core.validator import check, lint
from enumgen.emit.formatting import format_source
from enumgen.emit.generator import ModuleGenerator
from enumgen.emit.labels import storage_width

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    help="enumgen - generate Python enumeration types from YAML declarations",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"enumgen version {get_version()}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress messages"),
) -> None:
    """enumgen CLI main callback for global options."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config: Path | None) -> ir.DeclarationSet:
    if config is None:
        logger.info("Loading configuration from package source")
        return load_package(Path.cwd())
    return load_config(config)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (YAML, or Python with enumgen annotations)",
)


@app.command(name="generate")
def generate_command(
    output: Path = typer.Option(..., "--output", "-o", help="Output file path (required)"),
    config: Path | None = ConfigOption,
    no_format: bool = typer.Option(
        False, "--no-format", help="Write the generated text without running ruff format"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the generated module instead of writing it"
    ),
) -> None:
    """
    Generate a Python module with the configured enumerations.
    """
    try:
        decls = _load(config)
        generator = ModuleGenerator(
            decls,
            output,
            formatter=None if no_format else format_source,
            dry_run=dry_run,
        )
        result = generator.generate()
    except EnumgenError as e:
        raise _fail(str(e))

    for warning in result.warnings:
        typer.echo(f"WARNING: {warning}", err=True)

    if not result.success:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        for path in result.files_created:
            typer.echo(f"Unformatted output written to {path}", err=True)
        raise typer.Exit(code=1)

    if dry_run:
        typer.echo(result.artifacts["source"], nl=False)
        return
    count = len(result.artifacts["enum_names"])
    typer.echo(f"Generated {count} enumerations for package {decls.package_name!r} in {output}")


@app.command(name="check")
def check_command(config: Path | None = ConfigOption) -> None:
    """
    Validate a configuration and report lint warnings.
    """
    try:
        decls = _load(config)
        check(decls)
    except EnumgenError as e:
        raise _fail(str(e))

    warnings = lint(decls)
    for warning in warnings:
        typer.echo(f"WARNING: {warning}")
    typer.echo(
        f"OK: {len(decls.enumerations)} enumerations in package {decls.package_name!r} are valid."
    )


@app.command(name="inspect")
def inspect_command(config: Path | None = ConfigOption) -> None:
    """
    Show the enumerations of a configuration.
    """
    try:
        decls = _load(config)
        check(decls)
    except EnumgenError as e:
        raise _fail(str(e))

    table = Table(title=f"package {decls.package_name}")
    table.add_column("Type", style="bold cyan")
    table.add_column("Enumerators", justify="right")
    table.add_column("Bits", justify="right")
    table.add_column("Zero")
    table.add_column("Features")

    for enum in decls.enumerations:
        table.add_row(
            enum.type_name,
            str(len(enum.enumerators)),
            str(storage_width(len(enum.enumerators))),
            enum.zero_identifier or "-",
            ", ".join(enum.features) or "-",
        )
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
