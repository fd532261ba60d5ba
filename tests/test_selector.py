"""Tests for template selection."""

from pathlib import Path

import pytest

from gql_hookgen.core.ir import OperationDescriptor, OperationKind, TemplateVariant
from gql_hookgen.core.selector import VARIANTS, select_variant


def descriptor(kind: OperationKind, has_variables: bool) -> OperationDescriptor:
    return OperationDescriptor(
        source_path=Path("Op.graphql"),
        kind=kind,
        name="Op",
        has_variables=has_variables,
        primary_selection_name="op",
    )


@pytest.mark.parametrize(
    "kind,has_variables,expected",
    [
        (OperationKind.QUERY, False, TemplateVariant.QUERY_PLAIN),
        (OperationKind.QUERY, True, TemplateVariant.QUERY_WITH_VARIABLES),
        (OperationKind.MUTATION, False, TemplateVariant.MUTATION_PLAIN),
        (OperationKind.MUTATION, True, TemplateVariant.MUTATION_WITH_VARIABLES),
    ],
)
def test_classifiable_kinds_select_one_variant(kind, has_variables, expected):
    assert select_variant(descriptor(kind, has_variables)) is expected


@pytest.mark.parametrize("has_variables", [False, True])
def test_unclassifiable_has_no_variant(has_variables):
    assert select_variant(descriptor(OperationKind.UNCLASSIFIABLE, has_variables)) is None


@pytest.mark.parametrize("has_variables", [False, True])
def test_subscription_has_no_variant(has_variables):
    assert select_variant(descriptor(OperationKind.SUBSCRIPTION, has_variables)) is None


def test_every_variant_is_reachable():
    assert set(VARIANTS.values()) == set(TemplateVariant)
