"""Graph construction and analysis for GO-CAM causal-activity models.

This package bundles the typed graph data structures, the classifier and
graph builder, the hole/connectivity/overlap analyses and the Cytoscape and
GraphViz exporters.  Everything here works on already-parsed in-memory
models and performs no I/O except in :mod:`.parser` and :mod:`.batch`.
"""

from .models import (
    Category,
    Edge,
    Enabler,
    EnablerKind,
    Fact,
    GoCamModel,
    Graph,
    Individual,
    IndividualType,
    Node,
    NodeType,
    OverlapRecord,
)
from .builder import GraphBuilder, build_graph
from .classifier import classify
from .connectivity import ModelStats, get_connected_genes, get_stats
from .errors import EmptyMergeInput, GoCamError, UnrecognizedRelation, UpstreamParseError
from .export import to_cytoscape, to_dot
from .holes import find_holes
from .overlaps import find_overlaps, merge_models
from .parser import load_model, parse_model

__all__ = [
    "Category",
    "Edge",
    "EmptyMergeInput",
    "Enabler",
    "EnablerKind",
    "Fact",
    "GoCamError",
    "GoCamModel",
    "Graph",
    "GraphBuilder",
    "Individual",
    "IndividualType",
    "ModelStats",
    "Node",
    "NodeType",
    "OverlapRecord",
    "UnrecognizedRelation",
    "UpstreamParseError",
    "build_graph",
    "classify",
    "find_holes",
    "find_overlaps",
    "get_connected_genes",
    "get_stats",
    "load_model",
    "merge_models",
    "parse_model",
    "to_cytoscape",
    "to_dot",
]
