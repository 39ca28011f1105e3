"""
Label tables, ordinals, and storage widths for generated enumerations.

Every generated value stores a small position: 0 for the invalid value,
then 1..N for the enumerators in declared order. The label table maps a
position to its string, and the ordinal table maps it to the index
reported by ``index()``. The two differ only when explicit indices are used.
"""

from dataclasses import dataclass

from ..core import ir
from ..core.errors import EmitError

STORAGE_WIDTHS = (8, 16, 32)


def storage_width(count: int) -> int:
    """
    Return the bit width of the smallest unsigned integer that can hold
    positions 0..count, one state being reserved for the invalid value.
    """
    for bits in STORAGE_WIDTHS:
        if count < 1 << bits:
            return bits
    return 64


@dataclass(frozen=True)
class LabelTable:
    """
    Per-position strings and ordinals of an enumeration.

    Attributes:
        labels: labels[0] is the invalid label, labels[k] the label of the
            k-th enumerator
        ordinals: ordinals[k] is the index reported for position k
    """

    labels: tuple[str, ...]
    ordinals: tuple[int, ...]

    @property
    def explicit(self) -> bool:
        """Whether any ordinal differs from its position."""
        return any(ordinal != pos for pos, ordinal in enumerate(self.ordinals))

    def __len__(self) -> int:
        return len(self.labels)


def names_for(enum: ir.Enumeration) -> dict[str, str]:
    """Module-level table names used by the generated code for enum."""
    return {
        "strs": f"_str_{enum.type_name}",
        "idx": f"_idx_{enum.type_name}",
    }


def label_for(enum: ir.Enumeration, value: ir.Enumerator) -> str:
    """String representation of value; explicit text is never case-transformed."""
    if value.text:
        return value.text
    if enum.lowercase_text:
        return value.name.lower()
    return value.name


def assign_ordinals(enum: ir.Enumeration) -> tuple[int, ...]:
    """
    Assign the ordinal of each position of enum.

    Explicit indices are used verbatim when from-index is enabled. Other
    enumerators receive the next integer, starting at 1, that no explicit
    index claims.

    Raises:
        EmitError: If two positions end up with the same ordinal
    """
    values = enum.enumerators
    if not enum.with_index_lookup:
        return tuple(range(len(values) + 1))

    explicit = {v.explicit_index for v in values if v.explicit_index is not None}
    ordinals = [0]
    next_ordinal = 1
    for value in values:
        if value.explicit_index is not None:
            ordinals.append(value.explicit_index)
            continue
        while next_ordinal in explicit:
            next_ordinal += 1
        ordinals.append(next_ordinal)
        next_ordinal += 1

    if len(set(ordinals)) != len(ordinals):
        raise EmitError(f"enum {enum.type_name!r}: duplicate ordinals {ordinals}")
    return tuple(ordinals)


def build_label_table(enum: ir.Enumeration) -> LabelTable:
    """Build the label and ordinal tables for enum."""
    zero_label = ir.INVALID_LABEL
    zero_value = enum.zero_redeclaration
    if zero_value is not None and zero_value.text:
        zero_label = zero_value.text

    labels = [zero_label] + [label_for(enum, v) for v in enum.enumerators]
    return LabelTable(labels=tuple(labels), ordinals=assign_ordinals(enum))
