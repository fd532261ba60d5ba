"""Tests for code formatters."""

import json
import shutil

import pytest

from gql_hookgen.core.errors import ConfigError, FormatError
from gql_hookgen.core.formatting import (
    BasicFormatter,
    FormatOptions,
    Formatter,
    FormatterChain,
    PrettierFormatter,
    build_formatter,
    get_formatter,
    load_format_options,
)


@pytest.fixture
def options():
    return FormatOptions()


class TestFormatOptions:
    """Tests for loading formatter options."""

    def test_defaults_when_missing(self, tmp_path):
        options = load_format_options(tmp_path / ".prettierrc", extension="ts")
        assert options.print_width == 80
        assert options.parser == "typescript"

    def test_none_path(self):
        assert load_format_options(None, extension="js").parser == "babel"

    def test_reads_prettier_keys(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text(json.dumps({"printWidth": 120, "singleQuote": False, "semi": False, "endOfLine": "lf"}))
        options = load_format_options(config)
        assert options.print_width == 120
        assert options.single_quote is False
        assert options.semi is False

    def test_parser_follows_extension(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text(json.dumps({"parser": "flow"}))
        assert load_format_options(config, extension="ts").parser == "typescript"

    def test_reads_yaml_config(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text("singleQuote: false\ntabWidth: 4\nsemi: false\n")
        options = load_format_options(config)
        assert options.single_quote is False
        assert options.tab_width == 4
        assert options.semi is False

    def test_empty_config(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text("")
        assert load_format_options(config) == FormatOptions()

    def test_malformed_config(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text("{not json")
        with pytest.raises(ConfigError, match="Cannot read formatter config"):
            load_format_options(config)

    def test_config_must_be_mapping(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text("- semi\n- tabWidth\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_format_options(config)

    def test_invalid_value(self, tmp_path):
        config = tmp_path / ".prettierrc"
        config.write_text(json.dumps({"trailingComma": "sometimes"}))
        with pytest.raises(ConfigError):
            load_format_options(config)


class TestBasicFormatter:
    """Tests for BasicFormatter."""

    def test_strips_trailing_whitespace(self, options):
        assert BasicFormatter().format("a;   \nb;\t\n", options) == "a;\nb;\n"

    def test_drops_leading_blank_lines(self, options):
        assert BasicFormatter().format("\n\n\nimport x;\n", options) == "import x;\n"

    def test_collapses_blank_lines(self, options):
        assert BasicFormatter().format("a;\n\n\n\nb;", options) == "a;\n\nb;\n"

    def test_single_final_newline(self, options):
        assert BasicFormatter().format("a;\n\n\n", options) == "a;\n"

    def test_use_tabs(self):
        options = FormatOptions(use_tabs=True, tab_width=2)
        assert BasicFormatter().format("{\n    a;\n}", options) == "{\n\t\ta;\n}\n"

    def test_idempotent(self, options):
        text = "\nimport a;\n\n\nexport const b = 1;   \n"
        once = BasicFormatter().format(text, options)
        assert BasicFormatter().format(once, options) == once


class TestPrettierFormatter:
    """Tests for PrettierFormatter."""

    def test_command(self):
        options = FormatOptions(semi=False, single_quote=True, use_tabs=True)
        command = PrettierFormatter().command(options)
        assert command[:3] == ["prettier", "--parser", "typescript"]
        assert "--no-semi" in command
        assert "--single-quote" in command
        assert "--use-tabs" in command

    def test_missing_executable(self, options):
        formatter = PrettierFormatter(executable="definitely-not-prettier-xyz")
        with pytest.raises(FormatError):
            formatter.format("a", options)

    @pytest.mark.skipif(shutil.which("prettier") is None, reason="prettier not installed")
    def test_formats_with_prettier(self, options):
        result = PrettierFormatter().format("export * from './a'", options)
        assert result == "export * from './a';\n"


class TestFormatterChain:
    """Tests for FormatterChain."""

    def test_runs_in_order(self, options):
        class Append:
            def __init__(self, suffix):
                self.suffix = suffix

            def format(self, text, options):
                return text + self.suffix

        chain = FormatterChain(Append("1"))
        chain.add(Append("2"))
        assert chain.format("x", options) == "x12"


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_builtin_formatters(self):
        assert isinstance(BasicFormatter(), Formatter)
        assert isinstance(PrettierFormatter(), Formatter)
        assert isinstance(FormatterChain(), Formatter)

    def test_custom_formatter(self):
        class CustomFormatter:
            def format(self, text, options):
                return text

        assert isinstance(CustomFormatter(), Formatter)

    def test_get_formatter(self):
        assert isinstance(get_formatter("basic"), BasicFormatter)
        with pytest.raises(ConfigError):
            get_formatter("black")

    def test_build_single_formatter(self):
        assert isinstance(build_formatter("basic"), BasicFormatter)
        assert isinstance(build_formatter(["prettier"]), PrettierFormatter)

    def test_build_chain(self):
        formatter = build_formatter(["basic", "prettier"])
        assert isinstance(formatter, FormatterChain)
        assert [type(f) for f in formatter.formatters] == [BasicFormatter, PrettierFormatter]

    def test_build_requires_a_name(self):
        with pytest.raises(ConfigError):
            build_formatter([])
