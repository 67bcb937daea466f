"""Tests for the format backends."""

import pytest
from layerconf import ConfigError
from layerconf import ConfigParseError
from layerconf import FileFormat
from layerconf import InternalConsistencyError
from layerconf import Value
from layerconf import ValueKind
from layerconf.formats import json_format
from layerconf.value import table_into_python


class TestJsonFormat:
    """Test the JSON backend."""

    def test_integer_and_float(self):
        """Test whole numbers become INTEGER and fractional ones FLOAT."""
        table = FileFormat.JSON.parse(None, '{"a": 1, "b": 1.5}')
        assert table["a"] == Value.integer(1)
        assert table["b"] == Value.floating(1.5)

    def test_exponent_is_float(self):
        """Test exponent and decimal-point literals are FLOAT."""
        table = FileFormat.JSON.parse(None, '{"a": 1e2, "b": 2.0}')
        assert table["a"].kind is ValueKind.FLOAT
        assert table["b"].kind is ValueKind.FLOAT

    def test_integer_beyond_int64_is_float(self):
        """Test integers outside the signed 64-bit range fall back to FLOAT."""
        table = FileFormat.JSON.parse(None, '{"big": 9223372036854775808, "max": 9223372036854775807}')
        assert table["big"] == Value.floating(9223372036854775808.0)
        assert table["max"] == Value.integer(9223372036854775807)

    def test_structure_mirrors_document(self):
        """Test nesting, arrays and scalars map one-to-one."""
        text = '{"name": "app", "debug": true, "extra": null, "db": {"hosts": ["a", "b"], "port": 5432}}'
        table = FileFormat.JSON.parse(None, text)
        assert table_into_python(table) == {
            "name": "app",
            "debug": True,
            "extra": None,
            "db": {"hosts": ["a", "b"], "port": 5432},
        }
        assert table["db"].as_table()["hosts"].kind is ValueKind.ARRAY
        assert table["extra"].kind is ValueKind.NIL
        assert table["debug"].kind is ValueKind.BOOLEAN

    def test_origin_tags_every_node(self):
        """Test the parse origin is copied onto nested values."""
        table = FileFormat.JSON.parse("Settings.json", '{"db": {"hosts": ["a"]}}')
        db = table["db"]
        assert db.origin == "Settings.json"
        assert db.as_table()["hosts"].origin == "Settings.json"
        assert db.as_table()["hosts"].as_array()[0].origin == "Settings.json"

    @pytest.mark.parametrize("text", ["[1, 2, 3]", '"hello"', "42", "null", "true"])
    def test_non_object_root_gives_empty_table(self, text):
        """Test non-object roots silently yield an empty table, not an error."""
        assert FileFormat.JSON.parse(None, text) == {}

    def test_duplicate_keys_last_wins(self):
        """Test a repeated key keeps the later value."""
        table = FileFormat.JSON.parse(None, '{"a": 1, "a": 2}')
        assert table == {"a": Value.integer(2)}

    def test_malformed_raises_parse_error(self):
        """Test malformed JSON raises ConfigParseError naming the origin."""
        with pytest.raises(ConfigParseError, match="Settings.json") as exc_info:
            FileFormat.JSON.parse("Settings.json", '{"a": ')
        assert exc_info.value.uri == "Settings.json"

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400"])
    def test_non_finite_numbers_rejected(self, literal):
        """Test numbers outside the float range are parse errors."""
        with pytest.raises(ConfigParseError):
            FileFormat.JSON.parse(None, f'{{"a": {literal}}}')

    def test_unsupported_decoded_value_is_internal_error(self):
        """Test a value the decoder could never produce is an internal failure."""
        with pytest.raises(InternalConsistencyError):
            json_format.from_json_value(None, object())

    def test_internal_error_is_not_a_config_error(self):
        """Test an except ConfigError handler does not recover an internal failure."""
        assert not issubclass(InternalConsistencyError, ConfigError)
        with pytest.raises(InternalConsistencyError):
            try:
                json_format.from_json_value(None, object())
            except ConfigError:
                pytest.fail("internal failure was caught as a configuration error")

    def test_deeply_nested_document_is_parse_error(self):
        """Test nesting beyond the interpreter stack is reported as a parse error."""
        depth = 5000
        with pytest.raises(ConfigParseError, match="nested too deeply"):
            FileFormat.JSON.parse("deep.json", '{"a":' * depth + "1" + "}" * depth)


class TestTomlFormat:
    """Test the TOML backend."""

    def test_nested_tables(self):
        """Test tables, arrays and scalars."""
        text = 'title = "demo"\nratio = 0.5\n\n[server]\nport = 8080\nhosts = ["a", "b"]\n'
        table = FileFormat.TOML.parse("Settings.toml", text)
        assert table["title"] == Value.string("demo")
        assert table["ratio"] == Value.floating(0.5)
        server = table["server"].as_table()
        assert server["port"] == Value.integer(8080)
        assert server["hosts"] == Value.array([Value.string("a"), Value.string("b")])
        assert server["port"].origin == "Settings.toml"

    def test_dates_become_strings(self):
        """Test TOML dates are kept as ISO strings."""
        table = FileFormat.TOML.parse(None, "released = 1979-05-27\n")
        assert table["released"] == Value.string("1979-05-27")

    def test_integer_out_of_range(self):
        """Test integers outside the signed 64-bit range are parse errors."""
        with pytest.raises(ConfigParseError, match="out of range"):
            FileFormat.TOML.parse(None, "a = 9223372036854775808\n")

    def test_malformed_raises_parse_error(self):
        """Test malformed TOML raises ConfigParseError."""
        with pytest.raises(ConfigParseError):
            FileFormat.TOML.parse(None, "a = = 1\n")

    def test_deeply_nested_document_is_parse_error(self):
        """Test nesting beyond the interpreter stack is reported as a parse error."""
        depth = 5000
        with pytest.raises(ConfigParseError):
            FileFormat.TOML.parse(None, "a = " + "[" * depth + "]" * depth + "\n")


class TestYamlFormat:
    """Test the YAML backend."""

    def test_mapping_document(self):
        """Test a mapping document."""
        text = "name: app\ndebug: false\nport: 80\nratio: 1.25\nhosts:\n  - a\n  - b\nextra: ~\n"
        table = FileFormat.YAML.parse(None, text)
        assert table_into_python(table) == {
            "name": "app",
            "debug": False,
            "port": 80,
            "ratio": 1.25,
            "hosts": ["a", "b"],
            "extra": None,
        }
        assert table["port"].kind is ValueKind.INTEGER
        assert table["ratio"].kind is ValueKind.FLOAT

    def test_empty_document(self):
        """Test an empty document yields an empty table."""
        assert FileFormat.YAML.parse(None, "") == {}

    @pytest.mark.parametrize("text", ["- 1\n- 2\n", "hello\n", "42\n"])
    def test_non_mapping_root_gives_empty_table(self, text):
        """Test non-mapping roots silently yield an empty table."""
        assert FileFormat.YAML.parse(None, text) == {}

    def test_non_string_keys_are_stringified(self):
        """Test numeric and boolean keys become strings."""
        table = FileFormat.YAML.parse(None, "1: one\ntrue: yes-value\n")
        assert set(table) == {"1", "true"}

    def test_multiple_documents_rejected(self):
        """Test a stream of several documents is a parse error."""
        with pytest.raises(ConfigParseError):
            FileFormat.YAML.parse(None, "a: 1\n---\nb: 2\n")

    def test_malformed_raises_parse_error(self):
        """Test malformed YAML raises ConfigParseError."""
        with pytest.raises(ConfigParseError):
            FileFormat.YAML.parse("Settings.yaml", "a: [1, 2\n")

    def test_deeply_nested_document_is_parse_error(self):
        """Test nesting beyond the interpreter stack is reported as a parse error."""
        depth = 5000
        with pytest.raises(ConfigParseError, match="nested too deeply"):
            FileFormat.YAML.parse(None, "a: " + "[" * depth + "]" * depth + "\n")


class TestIniFormat:
    """Test the INI backend."""

    def test_sections_and_root_keys(self):
        """Test keys before any section are top-level; sections nest."""
        text = "name = app\n\n[database]\nUrl = postgres://localhost\nport = 5432\n"
        table = FileFormat.INI.parse("Settings.ini", text)
        assert table_into_python(table) == {
            "name": "app",
            "database": {"Url": "postgres://localhost", "port": "5432"},
        }
        assert table["database"].origin == "Settings.ini"

    def test_default_is_ordinary_section(self):
        """Test [DEFAULT] does not leak into other sections."""
        text = "[DEFAULT]\nlevel = info\n\n[app]\nname = demo\n"
        table = FileFormat.INI.parse(None, text)
        assert table_into_python(table) == {"DEFAULT": {"level": "info"}, "app": {"name": "demo"}}

    def test_no_interpolation(self):
        """Test percent signs are kept literally."""
        table = FileFormat.INI.parse(None, "[app]\nformat = %(name)s\n")
        assert table["app"].as_table()["format"] == Value.string("%(name)s")

    def test_malformed_raises_parse_error(self):
        """Test a line that is neither a key nor a section is a parse error."""
        with pytest.raises(ConfigParseError):
            FileFormat.INI.parse(None, "[app]\njust some words\n")

    def test_error_reports_original_line_number(self):
        """Test error line numbers count lines of the document as written."""
        with pytest.raises(ConfigParseError) as exc_info:
            FileFormat.INI.parse("Settings.ini", "[app]\njust some words\n")
        message = str(exc_info.value)
        assert "[line 2]" in message
        assert "[line 3]" not in message
        assert "just some words" in message
