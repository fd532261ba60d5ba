"""Template selection for parsed operations."""

from .ir import OperationDescriptor, OperationKind, TemplateVariant

# (kind, has_variables) -> variant. A new kind needs one row and one template.
VARIANTS: dict[tuple[OperationKind, bool], TemplateVariant] = {
    (OperationKind.QUERY, False): TemplateVariant.QUERY_PLAIN,
    (OperationKind.QUERY, True): TemplateVariant.QUERY_WITH_VARIABLES,
    (OperationKind.MUTATION, False): TemplateVariant.MUTATION_PLAIN,
    (OperationKind.MUTATION, True): TemplateVariant.MUTATION_WITH_VARIABLES,
}


def select_variant(descriptor: OperationDescriptor) -> TemplateVariant | None:
    """Return the template variant for an operation, or None if there is none."""
    return VARIANTS.get((descriptor.kind, descriptor.has_variables))
