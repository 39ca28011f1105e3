"""Version lookup for enumgen."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_VERSION_LINE = re.compile(r'^version\s*=\s*"([^"]+)"', re.MULTILINE)


def _source_version() -> str | None:
    if not _PYPROJECT.is_file():
        return None
    match = _VERSION_LINE.search(_PYPROJECT.read_text(encoding="utf-8"))
    return match.group(1) if match else None


def get_version() -> str:
    """
    Return the enumgen version.

    A source checkout reports the version in its pyproject.toml, so editable
    installs stay current without reinstalling; otherwise the installed
    distribution metadata is used.
    """
    found = _source_version()
    if found:
        return found
    try:
        return _metadata_version("enumgen")
    except PackageNotFoundError:
        return "0.0.0"
