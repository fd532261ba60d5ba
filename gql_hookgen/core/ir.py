"""Intermediate Representation (IR) for hook generation.

This module defines the dataclasses and enums that flow between the
definition parser, the template selector, the hook emitter and the index
aggregator.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class OperationKind(str, Enum):
    """Classification of a GraphQL definition file."""
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
    # Fragment-only documents: nothing to generate
    UNCLASSIFIABLE = "unclassifiable"

    @property
    def is_classifiable(self) -> bool:
        return self is not OperationKind.UNCLASSIFIABLE


class SelectionPolicy(str, Enum):
    """How the primary selection name of an operation is chosen.

    FIRST takes the first selected field. MATCH_OPERATION prefers the field
    named like the lower-camel-cased operation and falls back to FIRST.
    """
    FIRST = "first"
    MATCH_OPERATION = "match-operation"


class TemplateVariant(str, Enum):
    """The four canonical hook shapes, valued by their template file name."""
    QUERY_PLAIN = "query.j2"
    QUERY_WITH_VARIABLES = "query_variables.j2"
    MUTATION_PLAIN = "mutation.j2"
    MUTATION_WITH_VARIABLES = "mutation_variables.j2"

    @property
    def template_name(self) -> str:
        return self.value


class RunState(str, Enum):
    """Lifecycle of a generation run."""
    IDLE = "idle"
    DISCOVERING = "discovering"
    CLEANING_STALE = "cleaning-stale"
    PROCESSING = "processing"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass(frozen=True)
class OperationDescriptor:
    """Everything the generator needs to know about one definition file."""
    source_path: Path
    kind: OperationKind
    name: str | None = None
    has_variables: bool = False
    primary_selection_name: str = ""

    @property
    def file_stem(self) -> str:
        """Definition file name without its extension, e.g. 'GetUser'."""
        return self.source_path.stem


@dataclass
class GeneratedModule:
    """A rendered hook module waiting to be written."""
    output_path: Path
    content: str

    @property
    def base_name(self) -> str:
        return self.output_path.stem


@dataclass(frozen=True)
class IndexEntry:
    """A single re-export statement in an aggregate index.

    Entries are identified by the base name of the module they point at.
    """
    base_name: str

    @property
    def text(self) -> str:
        return f"export * from './{self.base_name}';"

    @property
    def sort_key(self) -> tuple[int, str, str]:
        # Length first, then case-insensitive; raw text settles case-only ties
        text = self.text
        return len(text), text.lower(), text


@dataclass
class IndexState:
    """Accumulated entries for one output directory during a run."""
    directory: Path
    entries: dict[str, IndexEntry] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    dirty: bool = False

    def add(self, base_name: str) -> bool:
        """Add an entry; return False if it was already present."""
        if base_name in self.entries:
            return False
        self.entries[base_name] = IndexEntry(base_name=base_name)
        self.dirty = True
        return True


class FileOutcome(BaseModel):
    """What happened to a single input file."""
    path: str
    reason: str
    error_type: str | None = None


class RunReport(BaseModel):
    """Summary of a generation run, serializable for the CLI."""
    state: RunState = RunState.IDLE
    discovered: int = 0
    generated: list[str] = Field(default_factory=list)
    skipped: list[FileOutcome] = Field(default_factory=list)
    errors: list[FileOutcome] = Field(default_factory=list)
    indexes: list[str] = Field(default_factory=list)
    message: str | None = None
