"""Command-line interface for gql-hookgen."""

from pathlib import Path

import click

from .core.config import DEFAULT_PATTERN, DEFAULT_SCHEMA_DIR, EXTENSIONS, GenerateOptions, IndexOptions
from .core.errors import HookgenError
from .core.formatting import FORMATTERS
from .core.ir import RunReport, SelectionPolicy
from .core.orchestrator import HookGenerator
from .core.schema_index import SchemaIndexGenerator
from .logging import configure_logging


_COMMON_OPTIONS = [
    click.option(
        "--root",
        "-r",
        default=".",
        type=click.Path(exists=True, file_okay=False),
        help="Project root that patterns and paths are relative to.",
    ),
    click.option(
        "--extension",
        "-e",
        default="ts",
        type=click.Choice(EXTENSIONS),
        help="Extension of generated files (default: ts).",
    ),
    click.option(
        "--prettier",
        "prettier_config",
        default=".prettierrc",
        help="Prettier config file with style options, JSON or YAML (default: .prettierrc).",
    ),
    click.option(
        "--formatter",
        default=("basic",),
        multiple=True,
        type=click.Choice(sorted(FORMATTERS)),
        help="Formatter applied to generated code; repeat to chain several (default: basic).",
    ),
    click.option(
        "--json",
        "as_json",
        is_flag=True,
        help="Print the run report as JSON.",
    ),
    click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose output.",
    ),
]


def common_options(func):
    """Apply the options shared by the hooks and index commands."""
    for option in reversed(_COMMON_OPTIONS):
        func = option(func)
    return func


def print_report(report: RunReport, as_json: bool, verbose: bool):
    """Print a run summary."""
    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return

    if report.message:
        click.echo(report.message)
    if verbose:
        for path in report.generated:
            click.echo(f"  Generated: {path}")
        for outcome in report.skipped:
            click.echo(f"  Skipped: {outcome.path} ({outcome.reason})")
    for outcome in report.errors:
        click.echo(f"  Error: {outcome.reason}", err=True)
    for path in report.indexes:
        click.echo(f"  Index: {path}")
    click.echo(
        f"Done! {len(report.generated)} generated, {len(report.skipped)} skipped, "
        f"{len(report.errors)} failed."
    )


@click.group(context_settings={"auto_envvar_prefix": "GQL_HOOKGEN"})
@click.version_option(package_name="gql-hookgen")
def main():
    """GraphQL hook generator.

    Generate typed hooks from GraphQL operation files and keep their
    re-export index files stable across runs.
    """
    pass


@main.command()
@common_options
@click.option(
    "--pattern",
    "-p",
    default=DEFAULT_PATTERN,
    show_default=True,
    help="Glob pattern for GraphQL definition files.",
)
@click.option(
    "--prefix",
    default="use",
    show_default=True,
    help="Prefix of generated hook names.",
)
@click.option(
    "--destination",
    "destination_dir",
    default="../hooks",
    show_default=True,
    help="Output directory, relative to each definition file's directory.",
)
@click.option(
    "--output",
    "-o",
    "output_root",
    default=None,
    help="Write all hooks into this single directory instead.",
)
@click.option(
    "--skip-on-name-mismatch/--no-skip-on-name-mismatch",
    default=True,
    help="Skip files whose name differs from their operation name (default: skip).",
)
@click.option(
    "--batch-index",
    is_flag=True,
    help="Write index files once at the end instead of after every hook.",
)
@click.option(
    "--selection-policy",
    default=SelectionPolicy.FIRST.value,
    type=click.Choice([p.value for p in SelectionPolicy]),
    show_default=True,
    help="How the primary selection name of an operation is picked.",
)
@click.option(
    "--templates",
    "template_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
def hooks(
    root: str,
    extension: str,
    prettier_config: str,
    formatter: tuple[str, ...],
    as_json: bool,
    verbose: bool,
    pattern: str,
    prefix: str,
    destination_dir: str,
    output_root: str | None,
    skip_on_name_mismatch: bool,
    batch_index: bool,
    selection_policy: str,
    template_dir: str | None,
):
    """Generate hooks from GraphQL query and mutation files.

    Examples:

        gql-hookgen hooks

        gql-hookgen hooks --pattern "src/graphql/**/*.graphql" --prefix use

        gql-hookgen hooks -o src/hooks --no-skip-on-name-mismatch
    """
    configure_logging(verbose=verbose, quiet=as_json)
    try:
        options = GenerateOptions(
            root=Path(root),
            extension=extension,
            prettier_config=prettier_config,
            formatter=tuple(formatter),
            pattern=pattern,
            prefix=prefix,
            skip_on_name_mismatch=skip_on_name_mismatch,
            destination_dir=destination_dir,
            output_root=output_root,
            batch_index=batch_index,
            selection_policy=SelectionPolicy(selection_policy),
            template_dir=template_dir,
        )
        report = HookGenerator(options).run()
    except HookgenError as e:
        raise click.ClickException(str(e)) from e

    print_report(report, as_json, verbose)


@main.command()
@common_options
@click.option(
    "--schema-dir",
    "-s",
    default=DEFAULT_SCHEMA_DIR,
    show_default=True,
    help="Directory containing the generated GraphQL schema modules.",
)
def index(
    root: str,
    extension: str,
    prettier_config: str,
    formatter: tuple[str, ...],
    as_json: bool,
    verbose: bool,
    schema_dir: str,
):
    """Generate the index file re-exporting all generated schema modules.

    Examples:

        gql-hookgen index

        gql-hookgen index --schema-dir src/lib/__generated__ --extension js
    """
    configure_logging(verbose=verbose, quiet=as_json)
    try:
        options = IndexOptions(
            root=Path(root),
            extension=extension,
            prettier_config=prettier_config,
            formatter=tuple(formatter),
            schema_dir=schema_dir,
        )
        report = SchemaIndexGenerator(options).run()
    except HookgenError as e:
        raise click.ClickException(str(e)) from e

    print_report(report, as_json, verbose)


if __name__ == "__main__":
    main()
