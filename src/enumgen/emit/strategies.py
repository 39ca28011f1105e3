"""
Optional capabilities of generated enumeration types.

Each capability is an EmissionStrategy: a predicate over the enumeration's
flags and a pure render function from (enumeration, label table) to a
fragment of the class body. The emitter appends the fragments of every
enabled strategy, in the order of STRATEGIES.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..core import ir
from .labels import LabelTable, names_for
from .templates import render_template


@dataclass(frozen=True)
class EmissionStrategy:
    """
    One optional capability of a generated type.

    Attributes:
        name: Configuration key that enables the capability
        enabled: Reports whether an enumeration requests the capability
        render: Renders the class-body fragment for an enumeration
    """

    name: str
    enabled: Callable[[ir.Enumeration], bool]
    render: Callable[[ir.Enumeration, LabelTable], str]


def has_mutators(enum: ir.Enumeration) -> bool:
    """Whether the generated type can change a value in place."""
    return enum.with_value_parsing or enum.with_text_codec


def constructor_name(enum: ir.Enumeration) -> str:
    """Name of the string lookup classmethod; private unless requested."""
    return "from_string" if enum.with_constructor else "_from_string"


def render_constructor(enum: ir.Enumeration, table: LabelTable) -> str:
    """Case-insensitive string to enumerator lookup."""
    return render_template(
        "constructor",
        type_name=enum.type_name,
        func=constructor_name(enum),
        **names_for(enum),
    )


def render_value_parsing(enum: ir.Enumeration, table: LabelTable) -> str:
    """Mutating set(s) built on the lookup classmethod."""
    return render_template(
        "value_parsing",
        type_name=enum.type_name,
        func=constructor_name(enum),
    )


def render_text_codec(enum: ir.Enumeration, table: LabelTable) -> str:
    """encode_text/decode_text using exact label matches."""
    return render_template(
        "text_codec",
        type_name=enum.type_name,
        invalid=ir.INVALID_LABEL,
        **names_for(enum),
    )


def render_index_lookup(enum: ir.Enumeration, table: LabelTable) -> str:
    """from_index(i), reading the ordinal table when indices are explicit."""
    return render_template(
        "index_lookup",
        type_name=enum.type_name,
        explicit=table.explicit,
        **names_for(enum),
    )


STRATEGIES: tuple[EmissionStrategy, ...] = (
    # The lookup is also needed, privately, by value parsing.
    EmissionStrategy(
        name="constructor",
        enabled=lambda e: e.with_constructor or e.with_value_parsing,
        render=render_constructor,
    ),
    EmissionStrategy(
        name="flag-value",
        enabled=lambda e: e.with_value_parsing,
        render=render_value_parsing,
    ),
    EmissionStrategy(
        name="text-marshal",
        enabled=lambda e: e.with_text_codec,
        render=render_text_codec,
    ),
    EmissionStrategy(
        name="from-index",
        enabled=lambda e: e.with_index_lookup,
        render=render_index_lookup,
    ),
)


def enabled_strategies(enum: ir.Enumeration) -> list[EmissionStrategy]:
    """Strategies requested by enum, in emission order."""
    return [s for s in STRATEGIES if s.enabled(enum)]
