"""Cross-model overlap detection and graph merging.

Storage identity and biological identity are kept apart.  A merged graph
keys every node by ``(originating model id, individual id)`` so nodes from
different models never collide; deciding that two nodes denote the same
entity is the job of :func:`find_overlaps`, which compares them by
``(node id, label)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence, Set, Tuple

from .errors import EmptyMergeInput
from .models import Edge, Graph, Node, NodeKey, NodeType, OverlapRecord

LOGGER = logging.getLogger(__name__)

MIN_OVERLAP_MODELS = 2


@dataclass(slots=True)
class _OverlapGroup:
    node_id: str
    label: str
    node_types: Set[NodeType] = field(default_factory=set)
    models: Set[Tuple[str, str]] = field(default_factory=set)
    processes: Set[str] = field(default_factory=set)
    occurs_in: Set[str] = field(default_factory=set)
    located_in: Set[str] = field(default_factory=set)

    def add(self, model: Tuple[str, str], node: Node) -> None:
        self.models.add(model)
        self.node_types.add(node.node_type)
        if node.part_of_process is not None:
            self.processes.add(node.part_of_process.label_or_id())
        self.occurs_in.update(item.label_or_id() for item in node.occurs_in)
        self.located_in.update(item.label_or_id() for item in node.located_in)

    @property
    def node_type(self) -> NodeType:
        if NodeType.ACTIVITY in self.node_types:
            return NodeType.ACTIVITY
        return min(self.node_types, key=lambda node_type: node_type.value)

    def to_record(self) -> OverlapRecord:
        return OverlapRecord(
            node_id=self.node_id,
            label=self.label,
            node_type=self.node_type,
            models=tuple(sorted(self.models)),
            part_of_process=tuple(sorted(self.processes)),
            occurs_in=tuple(sorted(self.occurs_in)),
            located_in=tuple(sorted(self.located_in)),
        )


def _origin(node: Node, graph: Graph) -> Tuple[str, str]:
    """Originating ``(model id, model title)`` of ``node`` within ``graph``."""

    if node.model_id is None:
        return graph.model_id, graph.title
    return node.model_id, node.model_title or ""


def find_overlaps(graphs: Sequence[Graph], min_models: int = MIN_OVERLAP_MODELS) -> List[OverlapRecord]:
    """Return nodes whose ``(id, label)`` occurs in at least ``min_models`` models.

    Nodes of a merged graph are attributed to their originating model.
    Records are sorted by node id then label, so reordering ``graphs`` does
    not change the result.
    """

    groups: Dict[Tuple[str, str], _OverlapGroup] = {}
    for graph in graphs:
        for node in graph.nodes.values():
            group_key = (node.id, node.label)
            group = groups.get(group_key)
            if group is None:
                group = _OverlapGroup(node_id=node.id, label=node.label)
                groups[group_key] = group
            group.add(_origin(node, graph), node)

    records = [
        group.to_record()
        for _, group in sorted(groups.items())
        if len({model_id for model_id, _ in group.models}) >= min_models
    ]
    LOGGER.debug("Found %d overlapping nodes across %d models", len(records), len(graphs))
    return records


def _rekey(key: NodeKey, graph: Graph) -> NodeKey:
    model_id, individual_id = key
    return (model_id or graph.model_id, individual_id)


def merge_models(new_id: str, new_title: str, graphs: Sequence[Graph], taxon: str = "") -> Graph:
    """Union the nodes and edges of ``graphs`` into a new graph.

    Every node and edge is re-keyed by its originating model so identical
    individual and fact ids from different models stay distinct, and each
    node remembers the title of that model.  Inputs are not modified.
    Raises :class:`EmptyMergeInput` when ``graphs`` is empty.
    """

    if not graphs:
        raise EmptyMergeInput()

    nodes: Dict[NodeKey, Node] = {}
    edges: List[Edge] = []
    for graph in graphs:
        for node in graph.nodes.values():
            model_id, model_title = _origin(node, graph)
            merged = replace(node, model_id=model_id, model_title=model_title)
            nodes[merged.key] = merged
        for edge in graph.edges:
            edges.append(
                replace(
                    edge,
                    model_id=edge.model_id or graph.model_id,
                    source=_rekey(edge.source, graph),
                    target=_rekey(edge.target, graph),
                )
            )

    if not taxon:
        taxa = {graph.taxon for graph in graphs if graph.taxon}
        taxon = taxa.pop() if len(taxa) == 1 else ""

    LOGGER.debug("Merged %d models into %s: %d nodes, %d edges", len(graphs), new_id, len(nodes), len(edges))
    return Graph(model_id=new_id, title=new_title, taxon=taxon, nodes=nodes, edges=tuple(edges))


__all__ = ["MIN_OVERLAP_MODELS", "find_overlaps", "merge_models"]
