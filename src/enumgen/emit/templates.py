"""
Jinja2 templates for generated enumeration modules.

Templates are rendered with StrictUndefined so a missing variable is a
generator bug, not silently empty output. Method templates are indented
for placement inside the class body.

Types with a mutator (set, decode_text) mark the values built by ``_make``
(module bindings and lookup results) read-only. Only read-only values are
hashable; ``copy()`` gives a modifiable value, ``freeze()`` a hashable one.
"""

import json
from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError

from ..core.errors import EmitError


def py_string(text: str) -> str:
    """Return a double-quoted Python string literal for text."""
    # JSON string escapes are a subset of Python's.
    return json.dumps(text, ensure_ascii=False)


MODULE_HEADER = '''\
# Code generated by enumgen. DO NOT EDIT.
{{ docstring }}

from __future__ import annotations

__all__ = [
{% for name in exports %}
    {{ name | py_string }},
{% endfor %}
]
'''

CLASS_CORE = '''\
class {{ type_name }}:
{% if docstring %}
{{ docstring }}

{% endif %}
{% if mutable %}
    __slots__ = ("_index", "_frozen")
{% else %}
    __slots__ = ("_index",)
{% endif %}

    _bits = {{ bits }}

    def __init__(self) -> None:
        self._index = 0
{% if mutable %}
        self._frozen = False
{% endif %}

    @classmethod
    def _make(cls, index: int) -> {{ type_name }}:
        if not 0 <= index < 1 << cls._bits:
            raise OverflowError(f"index {index} out of range for {{ type_name }}")
        v = cls()
        v._index = index
{% if mutable %}
        v._frozen = True
{% endif %}
        return v

    def enum(self) -> str:
        """Return the name of the enumeration type for {{ type_name }}."""
        return {{ type_name | py_string }}

    def index(self) -> int:
        """Return the ordinal index of this {{ type_name }} (0 is invalid)."""
{% if explicit %}
        return {{ idx }}[self._index]
{% else %}
        return self._index
{% endif %}

    def valid(self) -> bool:
        """Report whether this is a valid non-zero {{ type_name }} value."""
        return 0 < self._index < len({{ strs }})
{% if mutable %}

    def copy(self) -> {{ type_name }}:
        """Return a modifiable {{ type_name }} equal to this one."""
        v = {{ type_name }}()
        v._index = self._index
        return v

    def freeze(self) -> {{ type_name }}:
        """Return a read-only, hashable {{ type_name }} equal to this one."""
        if self._frozen:
            return self
        return {{ type_name }}._make(self._index)

    def _check_modifiable(self) -> None:
        if self._frozen:
            raise TypeError(f"{self!r} is read-only; modify a copy() instead")
{% endif %}

    def __str__(self) -> str:
        return {{ strs }}[self._index]

    def __repr__(self) -> str:
        return f"<{{ type_name }}: {self}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, {{ type_name }}):
            return NotImplemented
        return self._index == other._index

    def __hash__(self) -> int:
{% if mutable %}
        if not self._frozen:
            raise TypeError(f"unhashable modifiable {{ type_name }}; use freeze()")
{% endif %}
        return hash(({{ type_name }}, self._index))'''

CONSTRUCTOR = '''\
    @classmethod
    def {{ func }}(cls, s: str) -> {{ type_name }}:
        """Return the first {{ type_name }} whose string is a case-insensitive match for s.

        If no enumerator matches, the invalid (zero) value is returned.
        """
        lowered = s.lower()
        for i, opt in enumerate({{ strs }}[1:], start=1):
            if opt.lower() == lowered:
                return cls._make(i)
        return cls._make(0)'''

VALUE_PARSING = '''\
    def set(self, s: str) -> None:
        """Set this {{ type_name }} to the enumerator whose string matches s.

        Matching is case-insensitive. If s matches no enumerator, ValueError
        is raised and the value is left unchanged. Bound (read-only) values
        raise TypeError.
        """
        self._check_modifiable()
        e = {{ type_name }}.{{ func }}(s)
        if not e.valid():
            raise ValueError(f"invalid value for {{ type_name }}: {s!r}")
        self._index = e._index'''

TEXT_CODEC = '''\
    def encode_text(self) -> bytes:
        """Encode the value of this {{ type_name }} as UTF-8 text."""
        return str(self).encode("utf-8")

    def decode_text(self, data: bytes | str) -> None:
        """Decode the value of this {{ type_name }} from text.

        Empty text, the zero label and "{{ invalid }}" decode to the zero
        value. Text that does not exactly match an enumerator raises
        ValueError. Bound (read-only) values raise TypeError.
        """
        self._check_modifiable()
        self._index = 0
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        if text in ("", {{ strs }}[0], {{ invalid | py_string }}):
            return
        for i, opt in enumerate({{ strs }}[1:], start=1):
            if opt == text:
                self._index = i
                return
        raise ValueError(f"invalid value for {{ type_name }}: {text!r}")'''

INDEX_LOOKUP = '''\
    @classmethod
    def from_index(cls, i: int) -> {{ type_name }}:
        """Return the {{ type_name }} whose index is i.

        If no enumerator has index i, the invalid (zero) value is returned.
        """
{% if explicit %}
        for pos, ordinal in enumerate({{ idx }}):
            if pos > 0 and ordinal == i:
                return cls._make(pos)
        return cls._make(0)
{% else %}
        if 0 < i < len({{ strs }}):
            return cls._make(i)
        return cls._make(0)
{% endif %}'''

TEMPLATES = {
    "module_header": MODULE_HEADER,
    "class_core": CLASS_CORE,
    "constructor": CONSTRUCTOR,
    "value_parsing": VALUE_PARSING,
    "text_codec": TEXT_CODEC,
    "index_lookup": INDEX_LOOKUP,
}

_env = Environment(
    loader=BaseLoader(),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)
_env.filters["py_string"] = py_string


def render_template(name: str, **context: Any) -> str:
    """
    Render one of the named templates.

    Args:
        name: Key in TEMPLATES
        context: Template variables

    Returns:
        Rendered text without a trailing newline

    Raises:
        EmitError: If the template is unknown or fails to render
    """
    source = TEMPLATES.get(name)
    if source is None:
        raise EmitError(f"unknown template {name!r}")
    try:
        text = _env.from_string(source).render(**context)
    except TemplateError as e:
        raise EmitError(f"template {name!r} failed to render: {e}") from e
    return text.rstrip("\n")
