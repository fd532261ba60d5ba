"""Index file for the generated GraphQL schema directory.

Re-exports every generated schema module (and the hooks index, when present)
so application code can import types from one place instead of many files.
"""

import asyncio
from pathlib import Path

from ..logging import get_logger
from .aggregator import IndexAggregator
from .config import IndexOptions
from .errors import DiscoveryError
from .formatting import Formatter, build_formatter, load_format_options
from .ir import RunReport, RunState
from .orchestrator import discover

logger = get_logger("schema_index")


class SchemaIndexGenerator:
    """Writes ``<schema_dir>/index.<ext>`` for generated schema modules."""

    def __init__(self, options: IndexOptions, formatter: Formatter | None = None):
        self.options = options
        self.schema_dir = options.resolve(options.schema_dir)
        self.format_options = load_format_options(options.prettier_config_path, options.extension)
        self.formatter = formatter or build_formatter(options.formatter)

    def run(self) -> RunReport:
        return asyncio.run(self.run_async())

    async def run_async(self) -> RunReport:
        report = RunReport(state=RunState.DISCOVERING)
        aggregator = IndexAggregator(
            extension=self.options.extension,
            formatter=self.formatter,
            format_options=self.format_options,
            batch=True,
        )
        pattern = f"*.{self.options.extension}"
        files = discover(self.schema_dir, pattern, {aggregator.index_file_name})
        report.discovered = len(files)
        if not files:
            error = DiscoveryError(
                str(Path(self.options.schema_dir) / pattern),
                "You need to generate the GraphQL schema first.",
            )
            logger.info("%s", error)
            report.message = str(error)
            report.state = RunState.DONE
            return report

        logger.info("Generating index file...")
        report.state = RunState.PROCESSING
        for path in files:
            await aggregator.register(self.schema_dir, path.stem)

        report.state = RunState.FINALIZING
        await aggregator.flush_all()
        report.indexes = [str(p) for p in aggregator.written_indexes()]
        report.generated = [str(p) for p in files]
        report.state = RunState.DONE
        logger.info("Finish: %d modules re-exported", len(files))
        return report
