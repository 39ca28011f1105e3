"""
Declaration model for enumgen.

A DeclarationSet describes the enumerations generated into one module. The
models are frozen: they are built once (usually from YAML), validated once,
and rendered once.

YAML keys are declared as aliases; the Python field names are accepted too,
so declarations can be built directly in code:

    DeclarationSet(
        package_name="example",
        enumerations=[
            Enumeration(type_name="Example", values=[Enumerator(name="Good")]),
        ],
    )

Required fields default to empty values. Their absence is reported by
``enumgen.core.validator.check`` rather than by the schema layer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

INVALID_LABEL = "<invalid>"


class Enumerator(BaseModel):
    """
    A single enumerator of an enumeration.

    Attributes:
        name: Enumerator name (required)
        doc: Documentation text; "{name}" is replaced with the final
            binding name. Single lines become trailing comments, multiple
            lines a leading comment block.
        text: String representation; defaults to the name
        explicit_index: Ordinal to use instead of the sequential position
            (honoured only when the enumeration sets ``from-index``)
    """

    name: str = ""
    doc: str = ""
    text: str = ""
    explicit_index: int | None = Field(default=None, alias="index")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class Enumeration(BaseModel):
    """
    An enumeration type.

    The generated class wraps a private small-integer position; bindings
    for its enumerators are module-level constants. The zero position is
    the invalid (unset) value of the type.
    """

    type_name: str = Field(default="", alias="type")
    values: list[Enumerator] = Field(default_factory=list)

    # Prepended to each binding name, not to the type name.
    name_prefix: str = Field(default="", alias="prefix")

    type_doc: str = Field(default="", alias="doc")
    values_doc: str = Field(default="", alias="val-doc")

    # If set, a binding with this name denotes the zero value.
    zero_name: str = Field(default="", alias="zero")

    lowercase_text: bool = Field(default=False, alias="lowercase")
    with_constructor: bool = Field(default=False, alias="constructor")
    with_value_parsing: bool = Field(default=False, alias="flag-value")
    with_text_codec: bool = Field(default=False, alias="text-marshal")
    with_index_lookup: bool = Field(default=False, alias="from-index")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def full_name(self, name: str) -> str:
        """Return the binding name for an enumerator or zero name."""
        return self.name_prefix + name

    @property
    def zero_identifier(self) -> str:
        """Binding name of the zero value, or "" if none is requested."""
        if not self.zero_name:
            return ""
        return self.full_name(self.zero_name)

    def is_zero_redeclaration(self, value: Enumerator) -> bool:
        """
        Report whether value re-declares the zero binding.

        A value named like the zero binding attaches its text and doc to the
        zero value instead of defining a new enumerator. Giving it an
        explicit index makes it a distinct enumerator, which is not allowed.
        """
        return (
            bool(self.zero_name)
            and value.name == self.zero_name
            and value.explicit_index is None
        )

    @property
    def zero_redeclaration(self) -> Enumerator | None:
        """The first value re-declaring the zero binding, if any."""
        for value in self.values:
            if self.is_zero_redeclaration(value):
                return value
        return None

    @property
    def enumerators(self) -> list[Enumerator]:
        """Values that define enumerators, in declared order."""
        return [v for v in self.values if not self.is_zero_redeclaration(v)]

    @property
    def features(self) -> list[str]:
        """Names of the optional capabilities requested for this type."""
        flags = [
            ("constructor", self.with_constructor),
            ("flag-value", self.with_value_parsing),
            ("text-marshal", self.with_text_codec),
            ("from-index", self.with_index_lookup),
        ]
        return [name for name, enabled in flags if enabled]


class DeclarationSet(BaseModel):
    """A collection of enumerations generated into one module."""

    package_name: str = Field(default="", alias="package")
    enumerations: list[Enumeration] = Field(default_factory=list, alias="enum")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @property
    def type_names(self) -> set[str]:
        """Non-empty type names declared in the set."""
        return {e.type_name for e in self.enumerations if e.type_name}

    def get_enumeration(self, type_name: str) -> Enumeration | None:
        """Get an enumeration by type name."""
        for enum in self.enumerations:
            if enum.type_name == type_name:
                return enum
        return None
