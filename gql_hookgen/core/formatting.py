"""Formatters applied to generated code before it is written.

Formatting is a pluggable post-generation step. Anything with a
``format(text, options)`` method satisfies the Formatter protocol.

Example usage:
    from gql_hookgen.core.formatting import BasicFormatter, load_format_options

    options = load_format_options(".prettierrc", extension="ts")
    text = BasicFormatter().format("export * from './useGetUserQuery';", options)

    # Custom formatter adding a banner
    class AddBanner:
        def format(self, text, options):
            return "// Generated - do not edit\\n" + text
"""

import shutil
import subprocess
from pathlib import Path
from typing import Literal, Protocol, Sequence, runtime_checkable

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .errors import ConfigError, FormatError

PARSERS = {"ts": "typescript", "js": "babel"}


class FormatOptions(BaseModel):
    """Style options, named after the Prettier configuration keys."""

    # Prettier's camelCase keys are accepted alongside the snake_case fields
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    print_width: int = 80
    tab_width: int = 2
    use_tabs: bool = False
    semi: bool = True
    single_quote: bool = True
    trailing_comma: Literal["none", "es5", "all"] = "es5"
    parser: str = "typescript"


def load_format_options(path: str | Path | None, extension: str = "ts") -> FormatOptions:
    """Load style options from a Prettier config file.

    Both the JSON and the YAML form of .prettierrc are read. A missing file
    yields defaults. The parser always follows the extension.
    """
    data: dict = {}
    if path is not None:
        config_path = Path(path)
        if config_path.is_file():
            try:
                data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Cannot read formatter config {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Formatter config {config_path} must be a mapping of options")

    data["parser"] = PARSERS.get(extension, "babel")
    try:
        return FormatOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid formatter config: {e}") from e


@runtime_checkable
class Formatter(Protocol):
    """Protocol for code formatters.

    Example:
        class UpperCaseFormatter:
            def format(self, text: str, options: FormatOptions) -> str:
                return text.upper()
    """

    def format(self, text: str, options: FormatOptions) -> str:
        """Return the canonical formatted form of text."""
        ...


class BasicFormatter:
    """Whitespace normalization that needs no external tooling.

    Strips trailing whitespace, drops leading blank lines, collapses runs of
    blank lines and ends the text with exactly one newline.
    """

    def format(self, text: str, options: FormatOptions) -> str:
        lines = [line.rstrip() for line in text.splitlines()]
        result: list[str] = []
        for line in lines:
            if not line and (not result or not result[-1]):
                continue
            if options.use_tabs:
                stripped = line.lstrip(" ")
                indent = len(line) - len(stripped)
                line = "\t" * (indent // options.tab_width) + " " * (indent % options.tab_width) + stripped
            result.append(line)
        while result and not result[-1]:
            result.pop()
        return "\n".join(result) + "\n"


class PrettierFormatter:
    """Formats code with the ``prettier`` executable.

    Example:
        formatter = PrettierFormatter()  # looks up prettier on PATH
        formatter = PrettierFormatter(executable="./node_modules/.bin/prettier")
    """

    def __init__(self, executable: str = "prettier"):
        self.executable = executable

    def command(self, options: FormatOptions) -> list[str]:
        """Build the prettier command line for the given options."""
        args = [
            self.executable,
            "--parser", options.parser,
            "--print-width", str(options.print_width),
            "--tab-width", str(options.tab_width),
            "--trailing-comma", options.trailing_comma,
        ]
        if options.use_tabs:
            args.append("--use-tabs")
        if not options.semi:
            args.append("--no-semi")
        if options.single_quote:
            args.append("--single-quote")
        return args

    def format(self, text: str, options: FormatOptions) -> str:
        if shutil.which(self.executable) is None:
            raise FormatError(f"Formatter executable not found: {self.executable}")
        try:
            completed = subprocess.run(
                self.command(options),
                input=text,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise FormatError(f"Cannot run {self.executable}: {e}") from e
        if completed.returncode != 0:
            raise FormatError(f"{self.executable} failed: {completed.stderr.strip()}")
        return completed.stdout


class FormatterChain:
    """Runs a collection of formatters in order."""

    def __init__(self, *formatters: Formatter):
        self.formatters: list[Formatter] = list(formatters)

    def add(self, formatter: Formatter):
        """Add a formatter to the end of the chain."""
        self.formatters.append(formatter)

    def format(self, text: str, options: FormatOptions) -> str:
        for formatter in self.formatters:
            text = formatter.format(text, options)
        return text


FORMATTERS = {
    "basic": BasicFormatter,
    "prettier": PrettierFormatter,
}


def get_formatter(name: str) -> Formatter:
    """Instantiate a built-in formatter by name."""
    try:
        return FORMATTERS[name]()
    except KeyError:
        raise ConfigError(f"Unknown formatter: {name}") from None


def build_formatter(names: str | Sequence[str]) -> Formatter:
    """Instantiate one formatter, or a chain when several names are given.

    Example:
        build_formatter("basic")                  # BasicFormatter
        build_formatter(["basic", "prettier"])    # FormatterChain, in order
    """
    if isinstance(names, str):
        names = [names]
    if not names:
        raise ConfigError("At least one formatter is required")
    formatters = [get_formatter(name) for name in names]
    if len(formatters) == 1:
        return formatters[0]
    return FormatterChain(*formatters)
