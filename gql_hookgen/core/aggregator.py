"""Aggregate index generation.

Each output directory gets an ``index.<ext>`` that re-exports every generated
module in it, so consumers can import from a single path:

    export * from './hooks';
    export * from './useGetUserQuery';
    export * from './useUpdateUserMutation';

Entries are ordered by length, then case-insensitively. That keeps the file
stable across runs even though files are discovered in arbitrary order.
"""

import asyncio
from pathlib import Path

from .errors import FileAccessError
from .formatting import BasicFormatter, FormatOptions, Formatter
from .ir import IndexEntry, IndexState
from ..logging import get_logger

logger = get_logger("aggregator")

# Always first when the nested hooks index exists
HOOKS_ENTRY = "export * from './hooks';"


def sort_entries(entries) -> list[IndexEntry]:
    """Order entries by text length, then case-insensitively."""
    return sorted(entries, key=lambda e: e.sort_key)


class IndexAggregator:
    """Collects generated module names per directory and writes index files.

    In synchronized mode (the default) the index is rewritten after every
    registration. With ``batch=True`` nothing is written until ``flush_all``.
    The final file content is the same either way.
    """

    def __init__(
        self,
        extension: str = "ts",
        formatter: Formatter | None = None,
        format_options: FormatOptions | None = None,
        batch: bool = False,
        nested_index: str = "hooks",
    ):
        self.extension = extension
        self.formatter = formatter or BasicFormatter()
        self.format_options = format_options or FormatOptions()
        self.batch = batch
        self.nested_index = nested_index
        self.states: dict[Path, IndexState] = {}

    @property
    def index_file_name(self) -> str:
        return f"index.{self.extension}"

    def index_path(self, directory: Path) -> Path:
        return directory / self.index_file_name

    def state_for(self, directory: Path) -> IndexState:
        """Return the accumulator for a directory, creating it on first use."""
        directory = Path(directory)
        if directory not in self.states:
            self.states[directory] = IndexState(directory=directory)
        return self.states[directory]

    def render(self, state: IndexState) -> str:
        """Render the raw (unformatted) index content for a directory."""
        lines = [entry.text for entry in sort_entries(state.entries.values())]
        nested = state.directory / self.nested_index / self.index_file_name
        if nested.is_file():
            lines.insert(0, HOOKS_ENTRY)
        return "\n".join(lines) + "\n"

    async def register(self, directory: Path, base_name: str):
        """Add a module to a directory's index."""
        state = self.state_for(directory)
        async with state.lock:
            if not state.add(base_name):
                logger.debug("Index entry %s already registered in %s", base_name, directory)
                return
            if not self.batch:
                await self._write(state)

    async def flush(self, directory: Path) -> Path | None:
        """Write a directory's index if it has unwritten entries."""
        state = self.state_for(directory)
        async with state.lock:
            if not state.dirty:
                return None
            return await self._write(state)

    async def flush_all(self) -> list[Path]:
        """Flush every directory touched in this run."""
        written = []
        for directory in sorted(self.states):
            path = await self.flush(directory)
            if path is not None:
                written.append(path)
        return written

    def written_indexes(self) -> list[Path]:
        """Index files for every directory that received entries."""
        return [self.index_path(d) for d in sorted(self.states) if self.states[d].entries]

    async def _write(self, state: IndexState) -> Path:
        # Caller holds state.lock
        path = self.index_path(state.directory)
        await asyncio.to_thread(self._render_and_write, state, path)
        state.dirty = False
        logger.debug("Wrote %s (%d entries)", path, len(state.entries))
        return path

    def _render_and_write(self, state: IndexState, path: Path):
        content = self.formatter.format(self.render(state), self.format_options)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileAccessError(path, e) from e
