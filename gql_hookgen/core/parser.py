"""GraphQL definition parser using graphql-core.

Parses .graphql operation files and produces an OperationDescriptor.
"""

from pathlib import Path

from graphql import (
    FieldNode,
    GraphQLSyntaxError,
    OperationDefinitionNode,
    SelectionSetNode,
    parse,
)

from .errors import FileAccessError, ParseError
from .ir import OperationDescriptor, OperationKind, SelectionPolicy

_KINDS = {
    "query": OperationKind.QUERY,
    "mutation": OperationKind.MUTATION,
    "subscription": OperationKind.SUBSCRIPTION,
}


def lower_first(text: str) -> str:
    """Lower-case the first character, e.g. 'GetUser' -> 'getUser'."""
    return text[:1].lower() + text[1:]


class DefinitionParser:
    """Parses GraphQL definition files into operation descriptors."""

    def __init__(self, selection_policy: SelectionPolicy = SelectionPolicy.FIRST):
        self.selection_policy = SelectionPolicy(selection_policy)

    def parse_file(self, path: Path) -> OperationDescriptor:
        """Read and parse a single definition file."""
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileAccessError(path, e) from e
        return self.parse(content, path)

    def parse(self, content: str, source_path: Path) -> OperationDescriptor:
        """Parse definition source text.

        Only the first top-level definition is classified. Fragments and other
        definitions without an operation type come back as UNCLASSIFIABLE.
        """
        try:
            document = parse(content)
        except GraphQLSyntaxError as e:
            raise ParseError(source_path, e) from e

        if not document.definitions:
            return OperationDescriptor(source_path=source_path, kind=OperationKind.UNCLASSIFIABLE)

        first = document.definitions[0]
        if not isinstance(first, OperationDefinitionNode):
            return OperationDescriptor(source_path=source_path, kind=OperationKind.UNCLASSIFIABLE)

        name = self._operation_name(document.definitions)
        return OperationDescriptor(
            source_path=source_path,
            kind=_KINDS[first.operation.value],
            name=name,
            has_variables=bool(first.variable_definitions),
            primary_selection_name=self._selection_name(first.selection_set, name),
        )

    @staticmethod
    def _operation_name(definitions) -> str | None:
        """Name of the first operation definition in the document, if any."""
        for definition in definitions:
            if isinstance(definition, OperationDefinitionNode) and definition.name:
                return definition.name.value
        return None

    def _selection_name(self, selection_set: SelectionSetNode, operation_name: str | None) -> str:
        # Same schema field may be selected differently across files, so the
        # field name is only used to resolve generated type names.
        fields = [s for s in selection_set.selections if isinstance(s, FieldNode)]
        if not fields:
            return ""

        if self.selection_policy is SelectionPolicy.MATCH_OPERATION and operation_name:
            wanted = lower_first(operation_name)
            for field in fields:
                if field.name.value == wanted:
                    return field.name.value

        return fields[0].name.value
