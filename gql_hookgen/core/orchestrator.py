"""Hook generation run: discovery, stale cleanup, per-file generation, indexes.

A run moves through IDLE -> DISCOVERING -> CLEANING_STALE -> PROCESSING ->
FINALIZING -> DONE. Files are processed as independent asyncio tasks; index
files are only finalized once every task has finished.
"""

import asyncio
import glob
import shutil
from pathlib import Path

from ..logging import get_logger
from .aggregator import IndexAggregator
from .config import GenerateOptions
from .emitter import HookEmitter
from .errors import (
    ConfigError,
    DiscoveryError,
    FileAccessError,
    ParseError,
    UnsupportedOperationError,
)
from .formatting import Formatter, build_formatter, load_format_options
from .ir import FileOutcome, OperationDescriptor, RunReport, RunState
from .parser import DefinitionParser
from .selector import select_variant

logger = get_logger("orchestrator")


def discover(root: Path, pattern: str, exclude_names: set[str] | None = None) -> list[Path]:
    """Resolve a glob pattern under root to candidate files.

    The result is sorted only to make logs readable; nothing downstream
    depends on the order.
    """
    exclude_names = exclude_names or set()
    matches = glob.glob(pattern, root_dir=str(root), recursive=True)
    paths = {root / match for match in matches}
    return sorted(p for p in paths if p.is_file() and p.name not in exclude_names)


class HookGenerator:
    """Generates hooks for every definition file matched by a pattern.

    Example:
        report = HookGenerator(GenerateOptions(root=Path("."))).run()
        print(report.generated)
    """

    def __init__(self, options: GenerateOptions, formatter: Formatter | None = None):
        self.options = options
        self.format_options = load_format_options(options.prettier_config_path, options.extension)
        self.formatter = formatter or build_formatter(options.formatter)
        output_root = options.resolve(options.output_root) if options.output_root else None

        self.parser = DefinitionParser(options.selection_policy)
        self.emitter = HookEmitter(
            prefix=options.prefix,
            extension=options.extension,
            destination_dir=options.destination_dir,
            output_root=output_root,
            skip_on_name_mismatch=options.skip_on_name_mismatch,
            formatter=self.formatter,
            format_options=self.format_options,
            template_dir=options.template_dir,
        )
        self.state = RunState.IDLE
        self.report = RunReport()
        self.aggregator: IndexAggregator | None = None

    def run(self) -> RunReport:
        """Run the whole pipeline and return its report."""
        return asyncio.run(self.run_async())

    async def run_async(self) -> RunReport:
        self.report = RunReport()
        self.aggregator = IndexAggregator(
            extension=self.options.extension,
            formatter=self.formatter,
            format_options=self.format_options,
            batch=self.options.batch_index,
        )

        self._transition(RunState.DISCOVERING)
        index_name = self.aggregator.index_file_name
        files = discover(self.options.root, self.options.pattern, {index_name})
        self.report.discovered = len(files)
        if not files:
            error = DiscoveryError(self.options.pattern)
            logger.info("%s", error)
            self.report.message = str(error)
            self._transition(RunState.DONE)
            return self.report
        logger.info("Found %d definition files", len(files))

        self._transition(RunState.CLEANING_STALE)
        await asyncio.to_thread(self._clean_output_dirs, files)

        self._transition(RunState.PROCESSING)
        logger.info("Generating...")
        tasks = [asyncio.create_task(self._process(path)) for path in files]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Await the cancelled tasks before re-raising
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        self._transition(RunState.FINALIZING)
        await self.aggregator.flush_all()
        self.report.indexes = [str(p) for p in self.aggregator.written_indexes()]
        self._sort_report()
        logger.info(
            "Finish: %d generated, %d skipped, %d failed",
            len(self.report.generated), len(self.report.skipped), len(self.report.errors),
        )
        self._transition(RunState.DONE)
        return self.report

    def output_dirs(self, files: list[Path]) -> list[Path]:
        """Every output directory the given definition files map to."""
        return sorted({self.emitter.output_dir_for(path) for path in files})

    def _clean_output_dirs(self, files: list[Path]):
        # Previous runs may hold hooks for renamed or removed operations
        for directory in self.output_dirs(files):
            resolved = directory.resolve()
            if any(resolved in path.resolve().parents for path in files):
                raise ConfigError(f"Output directory {directory} contains definition files")
            try:
                if directory.exists():
                    logger.debug("Removing stale output %s", directory)
                    shutil.rmtree(directory)
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileAccessError(directory, e) from e

    async def _process(self, path: Path):
        try:
            descriptor = await asyncio.to_thread(self.parser.parse_file, path)
        except ParseError as e:
            logger.warning("%s", e)
            self._record_error(path, e)
            return

        if not descriptor.kind.is_classifiable:
            # Fragment files have nothing to generate
            self.report.skipped.append(FileOutcome(path=str(path), reason="no operation"))
            return

        reason = self.emitter.check_name(descriptor)
        if reason:
            logger.info("Skip generate file %s - %s", path, reason)
            self.report.skipped.append(FileOutcome(path=str(path), reason=reason))
            return

        await self._emit(descriptor)

    async def _emit(self, descriptor: OperationDescriptor):
        variant = select_variant(descriptor)
        try:
            module = await asyncio.to_thread(self.emitter.emit, descriptor, variant)
        except UnsupportedOperationError as e:
            logger.warning("%s", e)
            self._record_error(descriptor.source_path, e)
            return

        logger.debug("Generated %s", module.output_path)
        await self.aggregator.register(module.output_path.parent, module.base_name)
        self.report.generated.append(str(module.output_path))

    def _record_error(self, path: Path, error: Exception):
        self.report.errors.append(
            FileOutcome(path=str(path), reason=str(error), error_type=type(error).__name__)
        )

    def _sort_report(self):
        self.report.generated.sort()
        self.report.skipped.sort(key=lambda o: o.path)
        self.report.errors.sort(key=lambda o: o.path)

    def _transition(self, state: RunState):
        logger.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
        self.report.state = state
