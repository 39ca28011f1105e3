"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from enumgen.core.config_loader import config_from_file, load_config, parse_config
from enumgen.core.errors import ConfigError


def test_load_fixture(fixtures_dir: Path):
    decls = load_config(fixtures_dir / "enums.yml")

    assert decls.package_name == "example"
    assert [e.type_name for e in decls.enumerations] == ["Example", "Weekday"]

    weekday = decls.get_enumeration("Weekday")
    assert weekday.name_prefix == "Day"
    assert weekday.zero_identifier == "DayUnknown"
    assert weekday.features == ["constructor", "flag-value", "text-marshal", "from-index"]
    assert weekday.zero_redeclaration.text == "-"
    assert weekday.values[-1].doc == "{name} ends the week.\nPlan accordingly.\n"


def test_parse_minimal_config():
    decls = parse_config(
        """
package: colors
enum:
  - type: Color
    values:
      - name: Red
      - name: Green
        index: 7
"""
    )
    color = decls.enumerations[0]
    assert [v.name for v in color.values] == ["Red", "Green"]
    assert color.values[1].explicit_index == 7


def test_invalid_yaml_reports_location():
    text = "package: x\nenum:\n  - type: [unclosed\n"
    with pytest.raises(ConfigError) as exc_info:
        parse_config(text, "broken.yml")
    error = exc_info.value
    assert error.context is not None
    assert error.context.file == Path("broken.yml")
    assert str(error).startswith("broken.yml:")
    assert "invalid YAML" in str(error)


def test_empty_document():
    with pytest.raises(ConfigError, match="empty configuration in <string>"):
        parse_config("")


def test_document_must_be_mapping():
    with pytest.raises(ConfigError, match="must be a mapping, got list"):
        parse_config("- a\n- b\n")


def test_unknown_key_is_reported_with_location():
    text = "package: x\nenum:\n  - type: T\n    colour: red\n    values: [{name: A}]\n"
    with pytest.raises(ConfigError) as exc_info:
        parse_config(text, "enums.yml")
    message = str(exc_info.value)
    assert message.startswith("invalid configuration in enums.yml:")
    assert "enum.0.colour" in message


def test_wrong_value_type():
    with pytest.raises(ConfigError, match=r"enum\.0\.values\.0\.index"):
        parse_config("package: x\nenum:\n  - type: T\n    values: [{name: A, index: many}]\n")


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError, match="cannot read configuration"):
        config_from_file(tmp_path / "missing.yml")


def test_load_config_dispatches_python_sources(tmp_path: Path):
    source = tmp_path / "flags.py"
    source.write_text("# enumgen:type Flag\n# values:\n#   - name: Up\n#   - name: Down\n")
    decls = load_config(source)
    assert decls.package_name == "flags"
    assert [v.name for v in decls.enumerations[0].values] == ["Up", "Down"]


def test_non_utf8_file_is_a_config_error(tmp_path: Path):
    config = tmp_path / "enums.yml"
    config.write_bytes(b"package: \xff\n")
    with pytest.raises(ConfigError, match="not valid UTF-8") as exc_info:
        config_from_file(config)
    assert "cannot read configuration" in str(exc_info.value)
