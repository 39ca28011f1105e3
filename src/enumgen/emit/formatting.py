"""
Formatting of generated source.

The emitter's raw text is first parsed with ``ast`` so that template bugs are
reported with a location, then piped through ``ruff format`` so generated
modules are stable under the consumer's linter. Any failure raises
FormatError carrying the unformatted text.
"""

import ast
import logging
import subprocess
import sys
from pathlib import Path

from ..core.errors import ErrorContext, FormatError

logger = logging.getLogger(__name__)

RUFF_COMMAND = (sys.executable, "-m", "ruff", "format", "--stdin-filename", "generated.py", "-")


def check_syntax(source: str, filename: str = "<generated>") -> None:
    """
    Raise FormatError if source is not valid Python.

    Args:
        source: Generated module text
        filename: Name used in the error location
    """
    try:
        ast.parse(source, filename=filename)
    except SyntaxError as e:
        context = None
        if e.lineno:
            context = ErrorContext(
                file=Path(filename),
                line=e.lineno,
                column=e.offset or 1,
                snippet=(e.text or "").rstrip("\n") or None,
            )
        raise FormatError(f"generated code is not valid Python: {e.msg}", source, context) from e


def ruff_format(source: str) -> str:
    """
    Format source with ``ruff format``.

    Raises:
        FormatError: If ruff is unavailable or rejects the text
    """
    logger.debug("Running %s", " ".join(RUFF_COMMAND))
    try:
        result = subprocess.run(
            RUFF_COMMAND,
            input=source,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise FormatError(f"could not run ruff: {e}", source) from e
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise FormatError(f"ruff format failed: {detail}", source)
    return result.stdout


def format_source(source: str) -> str:
    """
    Canonicalize generated module text.

    Args:
        source: Raw text from ``enumgen.emit.emitter.render``

    Returns:
        Formatted text

    Raises:
        FormatError: If the text is not valid Python or cannot be formatted
    """
    check_syntax(source)
    return ruff_format(source)
