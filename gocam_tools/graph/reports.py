"""Tab-separated report rows.

Column order is consumed by downstream spreadsheets and visualisation
scripts; append new columns at the end only.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from .connectivity import ModelStats
from .models import GoCamModel, Graph, IndividualType, Node, OverlapRecord

TUPLE_COLUMNS = (
    "model_id",
    "model_title",
    "subject_label",
    "subject_id",
    "property_label",
    "object_label",
    "object_id",
)

STATS_COLUMNS = (
    "model_id",
    "model_title",
    "taxon",
    "total_genes",
    "total_complexes",
    "max_connected_activities",
    "total_connected_activities",
    "number_of_holes",
)

NODE_COLUMNS = (
    "model_id",
    "model_title",
    "taxon",
    "original_model_id",
    "individual_id",
    "node_id",
    "node_label",
    "node_type",
    "enabled_by_type",
    "enabled_by_id",
    "enabled_by_label",
    "process",
    "input",
    "output",
    "occurs_in",
    "located_in",
    "happens_during",
    "constituent_parts",
)

CONNECTED_GENE_COLUMNS = ("model_id", "activity_count", "gene_id")

OVERLAP_COLUMNS = (
    "node_id",
    "node_label",
    "node_type",
    "model_ids",
    "model_titles",
    "processes",
    "occurs_in",
    "located_in",
)


def _label(value: Optional[IndividualType]) -> str:
    return value.label_or_id() if value is not None else ""


def _join(values: Iterable[IndividualType]) -> str:
    return ",".join(value.label_or_id() for value in values)


def format_row(values: Sequence[object]) -> str:
    return "\t".join("" if value is None else str(value) for value in values)


def tuple_rows(model: GoCamModel) -> Iterator[List[str]]:
    """One row per fact whose subject and object both carry a type."""

    for fact in model.facts:
        subject = model.fact_subject(fact)
        obj = model.fact_object(fact)
        if subject is None or obj is None:
            continue
        subject_type = subject.primary_type
        object_type = obj.primary_type
        if subject_type is None or object_type is None:
            continue
        yield [
            model.id,
            model.title,
            subject_type.label or "",
            subject_type.id_or_type(),
            fact.property_label,
            object_type.label or "",
            object_type.id_or_type(),
        ]


def stats_row(graph: Graph, stats: ModelStats) -> List[str]:
    return [
        graph.model_id,
        graph.title,
        graph.taxon,
        str(stats.total_genes),
        str(stats.total_complexes),
        str(stats.max_connected_activities),
        str(stats.total_connected_activities),
        str(stats.number_of_holes),
    ]


def node_row(graph: Graph, node: Node) -> List[str]:
    enabler = node.enabler
    return [
        graph.model_id,
        graph.title,
        graph.taxon,
        node.model_id or "",
        node.individual_id,
        node.id,
        node.label,
        node.node_type.value,
        enabler.kind.value if enabler else "",
        enabler.id if enabler else "",
        enabler.label if enabler else "",
        _label(node.part_of_process),
        _join(node.has_input),
        _join(node.has_output),
        _join(node.occurs_in),
        _join(node.located_in),
        _label(node.happens_during),
        ",".join(enabler.parts) if enabler else "",
    ]


def node_rows(graph: Graph, nodes: Iterable[Node] | None = None) -> Iterator[List[str]]:
    for node in graph.nodes.values() if nodes is None else nodes:
        yield node_row(graph, node)


def connected_gene_rows(graph: Graph, buckets: dict[int, set[str]], min_count: int = 0) -> Iterator[List[str]]:
    for count in sorted(buckets):
        if count < min_count:
            continue
        for gene_id in sorted(buckets[count]):
            yield [graph.model_id, str(count), gene_id]


def overlap_row(record: OverlapRecord) -> List[str]:
    return [
        record.node_id,
        record.label,
        record.node_type.value,
        ",".join(model_id for model_id, _ in record.models),
        ",".join(title for _, title in record.models),
        ",".join(record.part_of_process),
        ",".join(record.occurs_in),
        ",".join(record.located_in),
    ]


__all__ = [
    "CONNECTED_GENE_COLUMNS",
    "NODE_COLUMNS",
    "OVERLAP_COLUMNS",
    "STATS_COLUMNS",
    "TUPLE_COLUMNS",
    "connected_gene_rows",
    "format_row",
    "node_row",
    "node_rows",
    "overlap_row",
    "stats_row",
    "tuple_rows",
]
