"""
Python source emitter for enumeration declarations.

``render`` turns a validated DeclarationSet into the text of one Python
module. For each enumeration it emits:

- a class wrapping a private position, with enum(), index(), valid(),
  __str__, equality and hashing (plus copy/freeze when values can be
  modified in place)
- the fragments of every enabled EmissionStrategy
- the label table (and ordinal table, for explicit indices)
- one module-level binding per enumerator, preceded by the zero binding

The output is deterministic. It is not formatted; see
``enumgen.emit.formatting``.
"""

import logging
from dataclasses import dataclass

from ..core import ir
from ..core.validator import check
from .labels import LabelTable, build_label_table, names_for, storage_width
from .strategies import enabled_strategies, has_mutators
from .templates import py_string, render_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    """A module-level constant naming one value of a generated type."""

    name: str
    position: int
    doc: str = ""


def inject_name(text: str, name: str) -> str:
    """Replace "{name}" markers in text with name."""
    return text.replace("{name}", name)


def format_comment(text: str, indent: str = "") -> str:
    """
    Reformat text as Python line comments, preserving line breaks.

    Returns "" when text is empty.
    """
    if not text.strip():
        return ""
    lines = []
    for line in text.strip().split("\n"):
        line = line.strip()
        lines.append(f"{indent}# {line}" if line else f"{indent}#")
    return "\n".join(lines)


def _escape_docstring(line: str, last: bool = False) -> str:
    line = line.replace("\\", "\\\\")
    if last and line.endswith('"'):
        # would merge with the closing quotes
        line = line[:-1] + '\\"'
    return line.replace('"""', '\\"\\"\\"')


def format_docstring(text: str, indent: str = "") -> str:
    """
    Reformat text as a triple-quoted docstring at the given indent.

    Returns "" when text is empty.
    """
    if not text.strip():
        return ""
    raw = [line.strip() for line in text.strip().split("\n")]
    lines = [_escape_docstring(line, last=i == len(raw) - 1) for i, line in enumerate(raw)]
    if len(lines) == 1:
        return f'{indent}"""{lines[0]}"""'
    body = [lines[0]] + [f"{indent}{line}" if line else "" for line in lines[1:]]
    return f'{indent}"""' + "\n".join(body) + f'\n{indent}"""'


def bindings_for(enum: ir.Enumeration) -> list[Binding]:
    """Bindings of enum in emission order: the zero binding first."""
    bindings = []
    if enum.zero_name:
        zero_value = enum.zero_redeclaration
        doc = zero_value.doc if zero_value is not None else ""
        name = enum.zero_identifier
        bindings.append(Binding(name=name, position=0, doc=inject_name(doc, name)))
    for pos, value in enumerate(enum.enumerators, start=1):
        name = enum.full_name(value.name)
        bindings.append(Binding(name=name, position=pos, doc=inject_name(value.doc, name)))
    return bindings


def _tuple_literal(items: list[str]) -> str:
    # At least two items: the zero label plus one enumerator.
    return "(" + ", ".join(items) + ")"


def _render_tables(enum: ir.Enumeration, table: LabelTable) -> list[str]:
    names = names_for(enum)
    lines = []
    if doc := format_comment(enum.values_doc):
        lines.append(doc)
    lines.append(f"{names['strs']} = {_tuple_literal([py_string(s) for s in table.labels])}")
    if table.explicit:
        lines.append(f"{names['idx']} = {_tuple_literal([str(n) for n in table.ordinals])}")
    return lines


def _render_bindings(enum: ir.Enumeration) -> list[str]:
    lines = []
    for binding in bindings_for(enum):
        statement = f"{binding.name} = {enum.type_name}._make({binding.position})"
        doc = format_comment(binding.doc)
        if doc and "\n" in doc:
            lines.append(doc)
            lines.append(statement)
            lines.append("")  # extra space after a documented enumerator
        elif doc:
            lines.append(f"{statement}  {doc}")
        else:
            lines.append(statement)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def render_enumeration(enum: ir.Enumeration) -> str:
    """
    Render the class, tables, and bindings of one enumeration.

    The enumeration is assumed to be valid.
    """
    table = build_label_table(enum)
    bits = storage_width(len(enum.enumerators))
    logger.debug(
        "Rendering %s: %d enumerators, %d-bit storage, features=%s",
        enum.type_name,
        len(enum.enumerators),
        bits,
        enum.features,
    )

    parts = [
        render_template(
            "class_core",
            type_name=enum.type_name,
            docstring=format_docstring(enum.type_doc, indent="    "),
            bits=bits,
            explicit=table.explicit,
            mutable=has_mutators(enum),
            **names_for(enum),
        )
    ]
    for strategy in enabled_strategies(enum):
        parts.append("")
        parts.append(strategy.render(enum, table))

    parts.extend(["", ""])
    parts.extend(_render_tables(enum, table))
    parts.append("")
    parts.extend(_render_bindings(enum))
    return "\n".join(parts)


def exports_for(decls: ir.DeclarationSet) -> list[str]:
    """Public names of the generated module, in emission order."""
    names = []
    for enum in decls.enumerations:
        names.append(enum.type_name)
        names.extend(b.name for b in bindings_for(enum))
    return names


def render(decls: ir.DeclarationSet) -> str:
    """
    Render decls as the text of one Python module.

    Args:
        decls: Declaration set; it is checked again before rendering

    Returns:
        Unformatted module source

    Raises:
        ValidationError: If decls is not valid
        EmitError: If an internal invariant is broken while rendering
    """
    check(decls)

    header = render_template(
        "module_header",
        docstring=format_docstring(f"Enumerations generated for package {decls.package_name}."),
        exports=exports_for(decls),
    )
    sections = [header]
    sections.extend(render_enumeration(enum) for enum in decls.enumerations)
    logger.debug(
        "Rendered %d enumerations for package %r", len(decls.enumerations), decls.package_name
    )
    return "\n\n\n".join(sections) + "\n"
