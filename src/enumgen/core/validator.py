"""
Consistency checks for enumgen declaration sets.

``check`` enforces the invariants the emitter relies on and stops at the
first failure. The error messages name the offending position (1-based) and,
for collisions, the enumeration that already owns the identifier.

``lint`` reports questionable but legal declarations as warnings.
"""

import keyword
import logging

from . import ir
from .errors import ValidationError

logger = logging.getLogger(__name__)


def is_identifier(name: str) -> bool:
    """Report whether name can be used as a Python binding name."""
    return name.isidentifier() and not keyword.iskeyword(name)


def is_reserved(name: str) -> bool:
    """Report whether name would clobber a module-level name of the generated code."""
    return name.startswith(("_str_", "_idx_")) or (name.startswith("__") and name.endswith("__"))


def check(decls: ir.DeclarationSet) -> None:
    """
    Check decls for internal consistency.

    Args:
        decls: Declaration set to check

    Raises:
        ValidationError: Describing the first inconsistency found
    """
    if not decls.package_name:
        raise ValidationError("package name not defined")
    if not decls.enumerations:
        raise ValidationError("no enumerations defined")

    type_names = decls.type_names
    enum_seen: set[str] = set()
    value_seen: dict[str, str] = {}  # full identifier -> owning type name

    for i, enum in enumerate(decls.enumerations, start=1):
        if not enum.type_name:
            raise ValidationError(f"enum {i}: type name not defined")
        if not is_identifier(enum.type_name):
            raise ValidationError(f'enum {i}: type name "{enum.type_name}" is not a valid identifier')
        if enum.type_name in enum_seen:
            raise ValidationError(f'enum {i}: duplicate type name "{enum.type_name}"')
        enum_seen.add(enum.type_name)

        if not enum.enumerators:
            raise ValidationError(f"enum {i}: no enumerators defined")

        _check_zero(enum, type_names, value_seen)
        _check_values(enum, type_names, value_seen)

    logger.debug(
        "Declarations for package %r are valid (%d enumerations)",
        decls.package_name,
        len(decls.enumerations),
    )


def _check_zero(enum: ir.Enumeration, type_names: set[str], value_seen: dict[str, str]) -> None:
    """Check and register the zero binding of enum, if it has one."""
    zero = enum.zero_identifier
    if not zero:
        return
    if not is_identifier(zero):
        raise ValidationError(f'enum "{enum.type_name}" default "{zero}" is not a valid identifier')
    if is_reserved(zero):
        raise ValidationError(f'enum "{enum.type_name}" default "{zero}" is reserved')
    if zero in type_names:
        raise ValidationError(f'enum "{enum.type_name}" default "{zero}" conflicts with type name')
    if zero in value_seen:
        raise ValidationError(
            f'enum "{enum.type_name}" default "{zero}" duplicated in "{value_seen[zero]}"'
        )
    value_seen[zero] = enum.type_name


def _check_values(enum: ir.Enumeration, type_names: set[str], value_seen: dict[str, str]) -> None:
    """Check and register the enumerators of enum."""
    names: set[str] = set()
    indexes: set[int] = set()

    for j, value in enumerate(enum.values, start=1):
        where = f'enum "{enum.type_name}" value {j}'
        full = enum.full_name(value.name)

        if not value.name:
            raise ValidationError(f"{where}: name not defined")
        if value.name in names:
            raise ValidationError(f'{where}: name "{full}" duplicated in "{enum.type_name}"')
        names.add(value.name)

        redeclares_zero = enum.is_zero_redeclaration(value)
        if enum.zero_name and value.name == enum.zero_name and not redeclares_zero:
            raise ValidationError(f'{where}: name "{value.name}" conflicts with default')

        if not is_identifier(full):
            raise ValidationError(f'{where}: name "{full}" is not a valid identifier')
        if is_reserved(full):
            raise ValidationError(f'{where}: name "{full}" is reserved')
        if full in type_names:
            raise ValidationError(f'{where}: name "{full}" conflicts with type name')

        owner = value_seen.get(full)
        if owner is not None and not (owner == enum.type_name and redeclares_zero):
            raise ValidationError(f'{where}: name "{full}" duplicated in "{owner}"')
        value_seen[full] = enum.type_name

        if value.explicit_index is not None:
            if value.explicit_index <= 0:
                raise ValidationError(f"{where}: index {value.explicit_index} must be positive")
            if value.explicit_index in indexes:
                raise ValidationError(f"{where}: index {value.explicit_index} duplicated")
            indexes.add(value.explicit_index)


def lint(decls: ir.DeclarationSet) -> list[str]:
    """
    Report legal but questionable declarations.

    Checks:
    - Explicit indices on an enumeration without from-index
    - Zero re-declarations that attach neither text nor doc
    - lowercase set although every enumerator has an explicit text
    - Enumerators sharing a label

    Returns:
        List of warning messages
    """
    warnings: list[str] = []

    for enum in decls.enumerations:
        if not enum.with_index_lookup and any(
            v.explicit_index is not None for v in enum.values
        ):
            warnings.append(
                f'enum "{enum.type_name}" declares explicit indices but not from-index; '
                f"sequential indices are used"
            )

        zero_value = enum.zero_redeclaration
        if zero_value is not None and not (zero_value.text or zero_value.doc):
            warnings.append(
                f'enum "{enum.type_name}" re-declares default "{enum.zero_name}" '
                f"without text or doc"
            )

        if enum.lowercase_text and enum.values and all(v.text for v in enum.values):
            warnings.append(
                f'enum "{enum.type_name}" sets lowercase but every value has explicit text'
            )

        labels = [
            v.text or (v.name.lower() if enum.lowercase_text else v.name)
            for v in enum.enumerators
        ]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            warnings.append(
                f'enum "{enum.type_name}" has duplicate labels {duplicates}; '
                f"string lookups return the first match"
            )

    for warning in warnings:
        logger.warning(warning)
    return warnings
