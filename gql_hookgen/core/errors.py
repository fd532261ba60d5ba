"""Exceptions raised while generating hooks and index files.

Per-file problems (ParseError, UnsupportedOperationError) are recorded in the
run report and do not stop the run. FileAccessError, FormatError and
ConfigError abort it.
"""

from pathlib import Path


class HookgenError(Exception):
    """Base class for all gql-hookgen errors."""


class DiscoveryError(HookgenError):
    """Raised when a pattern matches no input files."""

    def __init__(self, pattern: str, hint: str | None = None):
        self.pattern = pattern
        self.hint = hint
        message = f"No files matched pattern {pattern!r}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class ParseError(HookgenError):
    """Raised when a definition file is not valid GraphQL."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Error parsing {path}: {cause}")


class UnsupportedOperationError(HookgenError):
    """Raised when an operation kind has no hook template."""

    def __init__(self, path: Path, kind: str, name: str | None):
        self.path = path
        self.kind = kind
        self.name = name
        super().__init__(f"Not supported operation: {kind} - {name} ({path})")


class FileAccessError(HookgenError):
    """Raised when reading, writing or deleting a file fails."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Filesystem error on {path}: {cause}")


class FormatError(HookgenError):
    """Raised when the formatter cannot format generated code."""


class ConfigError(HookgenError):
    """Raised when the formatter configuration cannot be loaded."""
