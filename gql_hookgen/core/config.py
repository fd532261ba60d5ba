"""Run configuration for gql-hookgen commands."""

from dataclasses import dataclass
from pathlib import Path

from .ir import SelectionPolicy

DEFAULT_PATTERN = "src/**/*.graphql"
DEFAULT_SCHEMA_DIR = "src/lib/__generated__"
EXTENSIONS = ("ts", "js")


@dataclass
class CommonOptions:
    """Options shared by every command."""
    root: Path = Path(".")
    extension: str = "ts"
    prettier_config: str | None = ".prettierrc"
    # One name, or several applied in order
    formatter: str | tuple[str, ...] = "basic"

    def __post_init__(self):
        self.root = Path(self.root)
        if self.extension not in EXTENSIONS:
            raise ValueError(f"Unsupported extension: {self.extension} (expected one of {EXTENSIONS})")

    def resolve(self, path: str | Path) -> Path:
        """Resolve a path relative to the project root."""
        path = Path(path)
        return path if path.is_absolute() else self.root / path

    @property
    def prettier_config_path(self) -> Path | None:
        return self.resolve(self.prettier_config) if self.prettier_config else None


@dataclass
class GenerateOptions(CommonOptions):
    """Options for generating hooks from definition files."""
    pattern: str = DEFAULT_PATTERN
    prefix: str = "use"
    skip_on_name_mismatch: bool = True
    # Relative to each definition file's directory
    destination_dir: str = "../hooks"
    output_root: str | None = None
    batch_index: bool = False
    selection_policy: SelectionPolicy = SelectionPolicy.FIRST
    template_dir: str | None = None

    def __post_init__(self):
        super().__post_init__()
        self.selection_policy = SelectionPolicy(self.selection_policy)


@dataclass
class IndexOptions(CommonOptions):
    """Options for generating the schema index."""
    schema_dir: str = DEFAULT_SCHEMA_DIR
