"""Hook emitter for parsed GraphQL operations.

Renders Jinja2 templates to produce hook modules from operation descriptors.

Supports custom templates via the template_dir parameter:
    emitter = HookEmitter(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import os
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
)

from .errors import FileAccessError, UnsupportedOperationError
from .formatting import BasicFormatter, FormatOptions, Formatter
from .ir import GeneratedModule, OperationDescriptor, TemplateVariant
from .parser import lower_first


def capitalize(text: str) -> str:
    """Upper-case the first character, e.g. 'query' -> 'Query'."""
    return text[:1].upper() + text[1:]


class HookEmitter:
    """Generates hook modules from operation descriptors.

    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - query.j2 - query without variables
        - query_variables.j2 - query with variables
        - mutation.j2 - mutation without variables
        - mutation_variables.j2 - mutation with variables

    Each template receives exactly two values: ``operation_name`` and
    ``selection_name`` (lower-camel-cased).

    Example:
        emitter = HookEmitter(prefix="use", extension="ts")
        module = emitter.emit(descriptor, TemplateVariant.QUERY_PLAIN)
    """

    def __init__(
        self,
        prefix: str = "use",
        extension: str = "ts",
        destination_dir: str = "../hooks",
        output_root: str | Path | None = None,
        skip_on_name_mismatch: bool = True,
        formatter: Formatter | None = None,
        format_options: FormatOptions | None = None,
        template_dir: str | None = None,
    ):
        """Initialize the emitter.

        Args:
            prefix: Prepended to every hook module name
            extension: File extension of generated modules ("ts" or "js")
            destination_dir: Output directory relative to each definition's directory
            output_root: Single output directory for all hooks; overrides destination_dir
            skip_on_name_mismatch: Skip files whose name differs from the operation name
            formatter: Formatter applied before writing (default: BasicFormatter)
            format_options: Options passed to the formatter
            template_dir: Optional directory with custom Jinja2 templates
        """
        self.prefix = prefix
        self.extension = extension
        self.destination_dir = destination_dir
        self.output_root = Path(output_root) if output_root is not None else None
        self.skip_on_name_mismatch = skip_on_name_mismatch
        self.formatter = formatter or BasicFormatter()
        self.format_options = format_options or FormatOptions()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_hookgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def hook_name(self, descriptor: OperationDescriptor) -> str:
        """Return the generated module name, e.g. 'useGetUserQuery'."""
        return f"{self.prefix}{descriptor.name}{capitalize(descriptor.kind.value)}"

    def check_name(self, descriptor: OperationDescriptor) -> str | None:
        """Return a skip reason if the definition should not be emitted."""
        if not descriptor.name:
            return "anonymous operation"
        if self.skip_on_name_mismatch and descriptor.file_stem != descriptor.name:
            return "operation name not match"
        return None

    def output_dir_for(self, source_path: Path) -> Path:
        """Directory the hook for a definition file is written to."""
        if self.output_root is not None:
            return self.output_root
        # normpath folds '..' so sibling files map to one directory key
        return Path(os.path.normpath(source_path.parent / self.destination_dir))

    def render(self, descriptor: OperationDescriptor, variant: TemplateVariant | None) -> GeneratedModule:
        """Render the hook module for a descriptor without writing it."""
        if variant is None or not descriptor.name:
            raise UnsupportedOperationError(descriptor.source_path, descriptor.kind.value, descriptor.name)

        try:
            template = self.env.get_template(variant.template_name)
            content = template.render(
                operation_name=descriptor.name,
                selection_name=lower_first(descriptor.primary_selection_name),
            )
        except TemplateError as e:
            raise ValueError(f"Failed to render {variant.template_name} for {descriptor.source_path}: {e}") from e

        output_dir = self.output_dir_for(descriptor.source_path)
        return GeneratedModule(
            output_path=output_dir / f"{self.hook_name(descriptor)}.{self.extension}",
            content=content,
        )

    def write(self, module: GeneratedModule):
        """Format and write a module, creating its directory if needed."""
        content = self.formatter.format(module.content, self.format_options)
        try:
            module.output_path.parent.mkdir(parents=True, exist_ok=True)
            module.output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileAccessError(module.output_path, e) from e

    def emit(self, descriptor: OperationDescriptor, variant: TemplateVariant | None) -> GeneratedModule:
        """Render and write the hook for a descriptor."""
        module = self.render(descriptor, variant)
        self.write(module)
        return module
