"""
Loading of enumgen declaration sets.

A configuration is a YAML document:

    package: "name"          # name of the output package (required)

    enum:                    # enumerations to generate
      - type: "Name"         # type name (required)
        prefix: "x"          # (optional) prepended to each binding name
        zero: "Bad"          # (optional) binding name for the zero value
        doc: "text"          # (optional) class docstring
        val-doc: "text"      # (optional) comment above the enumerators
        lowercase: true      # lowercase labels derived from names
        constructor: true    # public from_string classmethod
        flag-value: true     # mutating set(s) method
        text-marshal: true   # encode_text/decode_text methods
        from-index: true     # from_index classmethod (honours index:)
        values:
          - name: A          # enumerator name (required)
            doc: "text"      # (optional) comment for the binding
            text: "aaa"      # (optional) string representation
            index: 5         # (optional) explicit ordinal

Python sources may carry the same configuration in annotated comments; see
``enumgen.core.extractor``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from . import ir
from .errors import ConfigError, make_config_error

logger = logging.getLogger(__name__)


def _describe_schema_error(e: PydanticValidationError) -> str:
    problems = []
    for err in e.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        problems.append(f"{location}: {err['msg']}")
    return "; ".join(problems)


def build_declarations(data: Any, source: str = "<string>") -> ir.DeclarationSet:
    """
    Build a DeclarationSet from decoded configuration data.

    Args:
        data: Mapping decoded from YAML (or built in code)
        source: Name of the configuration, for error messages

    Raises:
        ConfigError: If data does not match the configuration schema
    """
    if data is None:
        raise ConfigError(f"empty configuration in {source}")
    if not isinstance(data, dict):
        raise ConfigError(f"configuration in {source} must be a mapping, got {type(data).__name__}")
    try:
        return ir.DeclarationSet.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(
            f"invalid configuration in {source}: {_describe_schema_error(e)}"
        ) from e


def load_yaml(text: str, source: str = "<string>", line_offset: int = 0) -> Any:
    """
    Decode YAML text.

    Args:
        text: YAML document
        source: Name of the document, for error messages
        line_offset: Line of source on which text begins, minus one

    Raises:
        ConfigError: With the problem location when PyYAML reports one
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        problem = getattr(e, "problem", None) or str(e)
        if mark is not None:
            lines = text.splitlines()
            snippet = lines[mark.line] if mark.line < len(lines) else None
            raise make_config_error(
                f"invalid YAML: {problem}",
                file=source,
                line=mark.line + 1 + line_offset,
                column=mark.column + 1,
                snippet=snippet,
            ) from e
        raise ConfigError(f"invalid YAML in {source}: {problem}") from e


def read_source(path: Path, kind: str) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        ConfigError: If the file cannot be read or is not valid UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(
            f"cannot read {kind} {path}: not valid UTF-8 ({e.reason} at byte {e.start})"
        ) from e
    except OSError as e:
        raise ConfigError(f"cannot read {kind} {path}: {e.strerror or e}") from e


def parse_config(text: str, source: str = "<string>") -> ir.DeclarationSet:
    """Parse a YAML configuration text."""
    return build_declarations(load_yaml(text, source), source)


def config_from_file(path: Path | str) -> ir.DeclarationSet:
    """
    Read and parse the standalone YAML configuration at path.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = Path(path)
    text = read_source(path, "configuration")
    logger.debug("Loaded configuration text from %s", path)
    return parse_config(text, str(path))


def load_config(path: Path | str) -> ir.DeclarationSet:
    """
    Load a configuration from path.

    Files ending in ".py" are scanned for enumgen annotations; anything else
    is treated as a standalone YAML document.
    """
    path = Path(path)
    if path.suffix == ".py":
        from .extractor import config_from_python_file

        return config_from_python_file(path)
    return config_from_file(path)
