"""Tests for extracting declarations from annotated Python source."""

from pathlib import Path

import pytest

from enumgen.core.errors import ConfigError
from enumgen.core.extractor import (
    config_from_python_file,
    config_from_source,
    extract_declarations,
    load_package,
    package_name_for,
)


def test_comment_group_declaration():
    source = (
        "import os\n"
        "\n"
        "# enumgen:type Color\n"
        "# constructor: true\n"
        "# values:\n"
        "#   - name: Red\n"
        "x = 1\n"
        "# values: unrelated\n"
    )
    (decl,) = extract_declarations(source)
    assert decl.type_hint == "Color"
    assert decl.line == 3
    assert decl.fragment == "constructor: true\nvalues:\n  - name: Red"


def test_blank_line_ends_comment_group():
    source = "# enumgen:type Color\n# values: [{name: Red}]\n\n# doc: ignored\n"
    (decl,) = extract_declarations(source)
    assert decl.fragment == "values: [{name: Red}]"


def test_trailing_comment_is_not_a_declaration():
    assert extract_declarations("x = 1  # enumgen:type Color\n") == []


def test_tag_must_be_a_whole_word():
    assert extract_declarations("# enumgen:types Color\n# values: []\n") == []


def test_string_statement_declaration():
    source = 'def f():\n    """enumgen:type Size\n    values:\n      - name: Small\n    """\n'
    (decl,) = extract_declarations(source)
    assert decl.type_hint == "Size"
    assert decl.line == 2
    assert decl.fragment == "values:\n  - name: Small"


def test_string_expressions_that_are_not_statements_are_ignored():
    assert extract_declarations('x = "enumgen:type Size"\n') == []


def test_declarations_in_source_order(fixtures_dir: Path):
    text = (fixtures_dir / "annotated_pkg" / "shapes.py").read_text()
    assert [d.type_hint for d in extract_declarations(text)] == ["Shape", "Size"]


def test_invalid_python_is_a_config_error():
    with pytest.raises(ConfigError) as exc_info:
        extract_declarations("def broken(:\n", "broken.py")
    assert exc_info.value.context.file == Path("broken.py")
    assert exc_info.value.context.line == 1


def test_package_name_for():
    assert package_name_for(Path("pkg/colors.py")) == "colors"
    assert package_name_for(Path("/tmp/pkg/__init__.py")) == "pkg"


def test_config_from_source():
    decls = config_from_source(
        "widgets.py", "# enumgen:type Widget\n# type: Ignored\n# values: [{name: Knob}]\n"
    )
    assert decls.package_name == "widgets"
    assert decls.enumerations[0].type_name == "Widget"
    assert decls.enumerations[0].values[0].name == "Knob"


def test_config_from_source_without_annotations():
    with pytest.raises(ConfigError, match='no config comment found in "plain.py"'):
        config_from_source("plain.py", "x = 1\n")


def test_fragment_must_be_mapping():
    with pytest.raises(ConfigError, match="must be followed by a YAML mapping"):
        config_from_source("m.py", "# enumgen:type T\n# - a\n")


def test_fragment_yaml_errors_point_into_source():
    with pytest.raises(ConfigError) as exc_info:
        config_from_source("m.py", "x = 1\n# enumgen:type T\n# values: [unclosed\n")
    assert exc_info.value.context.file == Path("m.py")
    assert exc_info.value.context.line >= 3


def test_config_from_python_file(fixtures_dir: Path):
    decls = config_from_python_file(fixtures_dir / "annotated_pkg" / "shapes.py")
    assert decls.package_name == "shapes"
    size = decls.get_enumeration("Size")
    assert size.with_index_lookup
    assert size.values[1].explicit_index == 4
    assert decls.get_enumeration("Shape").values[1].text == "box"


def test_load_package(fixtures_dir: Path):
    decls = load_package(fixtures_dir / "annotated_pkg")
    assert decls.package_name == "annotated_pkg"
    assert [e.type_name for e in decls.enumerations] == ["Color", "Shape", "Size"]


def test_load_package_without_annotations(tmp_path: Path):
    (tmp_path / "plain.py").write_text("x = 1\n")
    with pytest.raises(ConfigError, match="no enumgen annotations found"):
        load_package(tmp_path)


def test_load_package_rejects_non_utf8_source(tmp_path: Path):
    (tmp_path / "latin.py").write_bytes(b"# enumgen:type T\n# values: [{name: Caf\xe9}]\n")
    with pytest.raises(ConfigError, match="cannot read source .*not valid UTF-8"):
        load_package(tmp_path)
