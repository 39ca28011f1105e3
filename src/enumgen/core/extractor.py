"""
Extraction of enumgen declarations from annotated Python source.

An enumeration can be declared next to the code that uses it, either in a
comment group whose first line is an ``enumgen:type`` tag:

    # enumgen:type Color
    # doc: A Color is a source of joy.
    # constructor: true
    # values:
    #   - name: Red
    #   - name: Green

or in a bare string statement starting with the tag:

    \"\"\"enumgen:type Size
    from-index: true
    values:
      - name: Small
      - name: Large
        index: 4
    \"\"\"

The text after the tag line is the YAML configuration of that enumeration,
without the ``type`` key. The package name is taken from the module name.
"""

from __future__ import annotations

import ast
import io
import logging
import textwrap
import tokenize
from dataclasses import dataclass
from pathlib import Path

from . import ir
from .config_loader import build_declarations, load_yaml, read_source
from .errors import ConfigError, make_config_error

logger = logging.getLogger(__name__)

TAG = "enumgen:type"


@dataclass(frozen=True)
class Declaration:
    """
    One annotated enumeration found in source text.

    Attributes:
        type_hint: Type name given on the tag line ("" if omitted)
        fragment: YAML text following the tag line
        line: Line of the tag (1-indexed)
    """

    type_hint: str
    fragment: str
    line: int


def _split_tag(text: str) -> str | None:
    """Return the text after the tag if text starts with it, else None."""
    if not text.startswith(TAG):
        return None
    rest = text[len(TAG) :]
    if rest and not rest[0].isspace():
        return None  # e.g. "enumgen:types"
    return rest


def _clean_comment(text: str) -> str:
    body = text[1:]  # drop "#"
    if body.startswith(" "):
        body = body[1:]
    return body.rstrip()


def _comment_groups(source_text: str) -> list[list[tuple[int, str]]]:
    """Group full-line comments that sit on consecutive lines."""
    groups: list[list[tuple[int, str]]] = []
    current: list[tuple[int, str]] = []
    last_line = 0

    readline = io.StringIO(source_text).readline
    for tok in tokenize.generate_tokens(readline):
        if tok.type != tokenize.COMMENT:
            continue
        line, col = tok.start
        if tok.line[:col].strip():
            # A trailing comment ends the group.
            if current:
                groups.append(current)
            current = []
            continue
        if current and line != last_line + 1:
            groups.append(current)
            current = []
        current.append((line, tok.string))
        last_line = line

    if current:
        groups.append(current)
    return groups


def _comment_declarations(source_text: str) -> list[Declaration]:
    found = []
    for group in _comment_groups(source_text):
        first_line, first = group[0]
        rest = _split_tag(_clean_comment(first))
        if rest is None:
            continue
        fragment = "\n".join(_clean_comment(text) for _, text in group[1:])
        found.append(Declaration(type_hint=rest.strip(), fragment=fragment, line=first_line))
    return found


def _string_declarations(tree: ast.AST) -> list[Declaration]:
    found = []
    for node in ast.walk(tree):
        if not (
            isinstance(node, ast.Expr)
            and isinstance(node.value, ast.Constant)
            and isinstance(node.value.value, str)
        ):
            continue
        rest = _split_tag(node.value.value.lstrip())
        if rest is None:
            continue
        hint, _, body = rest.partition("\n")
        found.append(
            Declaration(
                type_hint=hint.strip(),
                fragment=textwrap.dedent(body).strip("\n"),
                line=node.lineno,
            )
        )
    return found


def extract_declarations(source_text: str, filename: str = "<string>") -> list[Declaration]:
    """
    Find the enumgen annotations in a Python source text.

    Args:
        source_text: Python module text
        filename: Name used for diagnostics

    Returns:
        Declarations in source order

    Raises:
        ConfigError: If source_text is not valid Python
    """
    try:
        tree = ast.parse(source_text, filename=filename)
    except SyntaxError as e:
        raise make_config_error(
            f"invalid Python source: {e.msg}",
            file=filename,
            line=e.lineno,
            column=e.offset,
            snippet=(e.text or "").rstrip("\n") or None,
        ) from e

    found = _comment_declarations(source_text) + _string_declarations(tree)
    found.sort(key=lambda d: d.line)
    logger.debug("Found %d enumgen annotations in %s", len(found), filename)
    return found


def package_name_for(path: Path) -> str:
    """Name of the Python package or module that path defines."""
    if path.stem == "__init__":
        return path.resolve().parent.name
    return path.stem


def _enumeration_data(decl: Declaration, filename: str) -> dict:
    data = load_yaml(decl.fragment, filename, line_offset=decl.line)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise make_config_error(
            f"{TAG} {decl.type_hint} must be followed by a YAML mapping",
            file=filename,
            line=decl.line,
        )
    if decl.type_hint:
        data["type"] = decl.type_hint
    return data


def config_from_source(path: Path | str, text: str) -> ir.DeclarationSet:
    """
    Build a DeclarationSet from the annotations of a Python source text.

    Args:
        path: Source path; names the package and is used for diagnostics
        text: Python source text

    Raises:
        ConfigError: If the source is invalid or has no annotations
    """
    path = Path(path)
    decls = extract_declarations(text, str(path))
    if not decls:
        raise ConfigError(f'no config comment found in "{path}"')
    data = {
        "package": package_name_for(path),
        "enum": [_enumeration_data(d, str(path)) for d in decls],
    }
    return build_declarations(data, str(path))


def config_from_python_file(path: Path | str) -> ir.DeclarationSet:
    """Read the Python file at path and build a DeclarationSet from its annotations."""
    path = Path(path)
    text = read_source(path, "source")
    return config_from_source(path, text)


def load_package(directory: Path | str) -> ir.DeclarationSet:
    """
    Build a DeclarationSet from every annotated Python file in directory.

    Files are scanned in name order; the package name is the directory name.

    Raises:
        ConfigError: If no file in directory carries an annotation
    """
    directory = Path(directory)
    enums = []
    for path in sorted(directory.glob("*.py")):
        if not path.is_file():
            continue
        text = read_source(path, "source")
        for decl in extract_declarations(text, str(path)):
            enums.append(_enumeration_data(decl, str(path)))

    if not enums:
        raise ConfigError(f'no enumgen annotations found in "{directory}"')
    logger.info("Loaded %d annotated enumerations from %s", len(enums), directory)
    data = {"package": directory.resolve().name, "enum": enums}
    return build_declarations(data, str(directory))
