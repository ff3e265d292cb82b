"""Semantic classification of individuals from their root types."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Mapping, Tuple

from .errors import UnrecognizedRelation
from .models import Category, EnablerKind, Individual


MOLECULAR_FUNCTION_ID = "GO:0003674"
CELLULAR_COMPONENT_ID = "GO:0005575"
BIOLOGICAL_PROCESS_ID = "GO:0008150"
PROTEIN_CONTAINING_COMPLEX_ID = "GO:0032991"
CHEBI_PROTEIN_ID = "CHEBI:36080"
CHEBI_CHEMICAL_ENTITY_ID = "CHEBI:24431"

CHEBI_PREFIX = "CHEBI:"

# Prefix tables are matched in order; the first matching entry wins.
ENABLER_PREFIXES: Tuple[Tuple[str, EnablerKind], ...] = (
    (CHEBI_PREFIX, EnablerKind.CHEMICAL),
    ("GO:", EnablerKind.COMPLEX),
    ("ComplexPortal:", EnablerKind.COMPLEX),
    ("PR:", EnablerKind.MODIFIED_PROTEIN),
)

ROOT_CATEGORIES: Mapping[str, Category] = {
    MOLECULAR_FUNCTION_ID: Category.ACTIVITY,
    CELLULAR_COMPONENT_ID: Category.COMPONENT,
    BIOLOGICAL_PROCESS_ID: Category.PROCESS,
    PROTEIN_CONTAINING_COMPLEX_ID: Category.COMPLEX,
}


def has_root_term(individual: Individual, term_id: str) -> bool:
    return any(root.id == term_id for root in individual.root_types)


def classify(individual: Individual) -> FrozenSet[Category]:
    """Return every category the individual belongs to.

    Individuals without any type entry, or matching none of the rules, are
    classified as :attr:`Category.OTHER`.
    """

    if not individual.types:
        return frozenset({Category.OTHER})

    categories = {
        category for term_id, category in ROOT_CATEGORIES.items() if has_root_term(individual, term_id)
    }
    primary_id = individual.primary_type_id or ""
    if has_root_term(individual, CHEBI_CHEMICAL_ENTITY_ID) and primary_id.startswith(CHEBI_PREFIX):
        categories.add(Category.CHEMICAL)
    if primary_id == CHEBI_PROTEIN_ID:
        categories.add(Category.UNKNOWN_PROTEIN)
    if not categories:
        categories.add(Category.OTHER)
    return frozenset(categories)


def is_activity(individual: Individual) -> bool:
    return Category.ACTIVITY in classify(individual)


def is_graph_node(individual: Individual) -> bool:
    """Activities and non-placeholder chemicals become graph nodes."""

    categories = classify(individual)
    if Category.ACTIVITY in categories:
        return True
    return Category.CHEMICAL in categories and Category.UNKNOWN_PROTEIN not in categories


def is_gene_id(identifier: str, gene_prefixes: Iterable[str]) -> bool:
    return any(identifier.startswith(prefix) for prefix in gene_prefixes)


def enabler_kind(individual: Individual, gene_prefixes: Iterable[str]) -> EnablerKind:
    """Resolve the enabler variant from the primary type id namespace.

    Raises :class:`UnrecognizedRelation` when the namespace is not covered
    by the gene allow-list or :data:`ENABLER_PREFIXES`.
    """

    type_id = individual.primary_type_id
    if not type_id:
        raise UnrecognizedRelation(individual.id, type_id)
    if is_gene_id(type_id, gene_prefixes):
        return EnablerKind.GENE
    for prefix, kind in ENABLER_PREFIXES:
        if type_id.startswith(prefix):
            return kind
    raise UnrecognizedRelation(individual.id, type_id)


__all__ = [
    "BIOLOGICAL_PROCESS_ID",
    "CELLULAR_COMPONENT_ID",
    "CHEBI_CHEMICAL_ENTITY_ID",
    "CHEBI_PROTEIN_ID",
    "ENABLER_PREFIXES",
    "MOLECULAR_FUNCTION_ID",
    "PROTEIN_CONTAINING_COMPLEX_ID",
    "classify",
    "enabler_kind",
    "has_root_term",
    "is_activity",
    "is_gene_id",
    "is_graph_node",
]
