"""Core modules for GraphQL hook generation."""

from .aggregator import HOOKS_ENTRY, IndexAggregator, sort_entries
from .config import GenerateOptions, IndexOptions
from .emitter import HookEmitter
from .errors import (
    ConfigError,
    DiscoveryError,
    FileAccessError,
    FormatError,
    HookgenError,
    ParseError,
    UnsupportedOperationError,
)
from .formatting import (
    BasicFormatter,
    FormatOptions,
    Formatter,
    FormatterChain,
    PrettierFormatter,
    build_formatter,
    load_format_options,
)
from .ir import (
    FileOutcome,
    GeneratedModule,
    IndexEntry,
    IndexState,
    OperationDescriptor,
    OperationKind,
    RunReport,
    RunState,
    SelectionPolicy,
    TemplateVariant,
)
from .orchestrator import HookGenerator
from .parser import DefinitionParser
from .schema_index import SchemaIndexGenerator
from .selector import select_variant

__all__ = [
    # IR types
    "FileOutcome",
    "GeneratedModule",
    "IndexEntry",
    "IndexState",
    "OperationDescriptor",
    "OperationKind",
    "RunReport",
    "RunState",
    "SelectionPolicy",
    "TemplateVariant",
    # Errors
    "ConfigError",
    "DiscoveryError",
    "FileAccessError",
    "FormatError",
    "HookgenError",
    "ParseError",
    "UnsupportedOperationError",
    # Formatting
    "BasicFormatter",
    "FormatOptions",
    "Formatter",
    "FormatterChain",
    "PrettierFormatter",
    "build_formatter",
    "load_format_options",
    # Pipeline
    "DefinitionParser",
    "select_variant",
    "HookEmitter",
    "HOOKS_ENTRY",
    "IndexAggregator",
    "sort_entries",
    "HookGenerator",
    "SchemaIndexGenerator",
    # Configuration
    "GenerateOptions",
    "IndexOptions",
]
