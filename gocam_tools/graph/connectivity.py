"""Per-gene connectivity statistics.

Connectivity is measured on the weakly connected components of the model
graph: an activity is *connected* when at least one other activity can be
reached from it through any chain of edges, whatever their direction or
node types in between.  Causal relations are not the only ones that link
activities: a shared chemical reached through ``has input`` or
``has output`` edges connects them as well.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Dict, List, Set

import networkx as nx

from .holes import find_holes
from .models import EnablerKind, Graph, NodeKey, format_node_key


@dataclass(frozen=True, slots=True)
class ModelStats:
    """Aggregate counts for one graph."""

    total_genes: int = 0
    total_complexes: int = 0
    max_connected_activities: int = 0
    total_connected_activities: int = 0
    number_of_holes: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def to_networkx(graph: Graph) -> nx.MultiDiGraph:
    """Project ``graph`` onto a :class:`networkx.MultiDiGraph` keyed by node key."""

    projected = nx.MultiDiGraph()
    for key, node in graph.nodes.items():
        projected.add_node(key, node=node)
    for edge in graph.edges:
        projected.add_edge(
            edge.source,
            edge.target,
            key=format_node_key(edge.key),
            relation_id=edge.relation_id,
            relation_label=edge.relation_label,
        )
    return projected


def activity_components(graph: Graph) -> List[Set[NodeKey]]:
    """Weakly connected components, restricted to their activity nodes."""

    projected = to_networkx(graph)
    components: List[Set[NodeKey]] = []
    for component in nx.weakly_connected_components(projected):
        activities = {key for key in component if graph.nodes[key].is_activity}
        if activities:
            components.append(activities)
    return components


def connected_activities(graph: Graph) -> Set[NodeKey]:
    """Activity nodes that share a component with at least one other activity."""

    connected: Set[NodeKey] = set()
    for activities in activity_components(graph):
        if len(activities) >= 2:
            connected.update(activities)
    return connected


def get_connected_genes(graph: Graph) -> Dict[int, Set[str]]:
    """Group enabling gene ids by how many connected activities they enable.

    Every gene that enables at least one activity appears in exactly one
    bucket; genes whose activities are all isolated land in bucket ``0``.
    """

    connected = connected_activities(graph)
    gene_activities: Dict[str, Set[NodeKey]] = defaultdict(set)
    for key, node in graph.nodes.items():
        enabler = node.enabler
        if enabler is None or enabler.kind is not EnablerKind.GENE:
            continue
        activities = gene_activities[enabler.id]
        if key in connected:
            activities.add(key)

    buckets: Dict[int, Set[str]] = defaultdict(set)
    for gene_id, activities in gene_activities.items():
        buckets[len(activities)].add(gene_id)
    return dict(sorted(buckets.items()))


def genes_with_min_activities(graph: Graph, min_count: int = 2) -> Set[str]:
    """Gene ids enabling at least ``min_count`` connected activities."""

    genes: Set[str] = set()
    for count, gene_ids in get_connected_genes(graph).items():
        if count >= min_count:
            genes.update(gene_ids)
    return genes


def get_stats(graph: Graph) -> ModelStats:
    genes: Set[str] = set()
    complexes: Set[str] = set()
    for node in graph.nodes.values():
        if node.enabler is None:
            continue
        if node.enabler.kind is EnablerKind.GENE:
            genes.add(node.enabler.id)
        elif node.enabler.kind is EnablerKind.COMPLEX:
            complexes.add(node.enabler.id)

    component_sizes = [len(activities) for activities in activity_components(graph)]
    return ModelStats(
        total_genes=len(genes),
        total_complexes=len(complexes),
        max_connected_activities=max(component_sizes, default=0),
        total_connected_activities=sum(size for size in component_sizes if size >= 2),
        number_of_holes=sum(1 for _ in find_holes(graph)),
    )


__all__ = [
    "ModelStats",
    "activity_components",
    "connected_activities",
    "genes_with_min_activities",
    "get_connected_genes",
    "get_stats",
    "to_networkx",
]
