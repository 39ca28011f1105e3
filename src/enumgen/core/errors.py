"""
Error types for enumgen configuration loading, validation, and emission.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class EnumgenError(Exception):
    """Base exception for all enumgen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if not self.context:
            return self.message
        text = f"{self.context.format()}: {self.message}"
        if self.context.snippet:
            text += "\n" + self.context.format_snippet()
        return text


class ConfigError(EnumgenError):
    """
    Raised when a configuration cannot be read or decoded.

    Examples:
    - Missing configuration file
    - Malformed YAML
    - Unknown or mistyped configuration keys
    - Python source without enumgen annotations
    """

    pass


class ValidationError(EnumgenError):
    """
    Raised when a declaration set fails consistency checks.

    Examples:
    - Missing package, type, or enumerator names
    - Duplicate type names
    - Enumerator identifiers claimed by two enumerations
    - A value clashing with its enumeration's zero binding
    """

    pass


class EmitError(EnumgenError):
    """
    Raised when the emitter detects a broken internal invariant.

    A validated declaration set should never produce this error; seeing it
    means the generator itself is at fault.
    """

    pass


class FormatError(EmitError):
    """
    Raised when the formatting step rejects generated text.

    The unformatted text is kept in ``source`` so that it can be inspected.
    It must not be used as generator output.
    """

    def __init__(self, message: str, source: str, context: Optional["ErrorContext"] = None):
        self.source = source
        super().__init__(message, context)


@dataclass
class ErrorContext:
    """
    Location of a problem in a configuration, annotated source, or
    generated module.

    Attributes:
        file: File (or pseudo-file such as "<generated>") holding the problem
        line: 1-based line
        column: 1-based column
        snippet: The offending source line, if known
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Return the location as "file:line:column", e.g. "enums.yml:10:5".
        """
        return f"{self.file}:{self.line}:{self.column}"

    def format_snippet(self) -> str:
        """Format the source line with a marker under the error column."""
        if not self.snippet:
            return ""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + max(self.column - 1, 0)) + "^^^"
        return f"{prefix}{self.snippet}\n{marker}"


def make_config_error(
    message: str,
    file: Path | str | None = None,
    line: int | None = None,
    column: int | None = None,
    snippet: str | None = None,
) -> ConfigError:
    """
    Helper to create a ConfigError with optional context.

    Args:
        message: Error description
        file: Optional source file path
        line: Optional line number
        column: Optional column number
        snippet: Optional source line

    Returns:
        ConfigError with context if a location was provided
    """
    if file and line:
        context = ErrorContext(
            file=Path(file),
            line=line,
            column=column or 1,
            snippet=snippet,
        )
        return ConfigError(message, context)
    return ConfigError(message)
