"""Cytoscape and GraphViz export helpers."""

from __future__ import annotations

from typing import Any, Dict, List

from .models import Graph, format_node_key


def to_cytoscape(graph: Graph) -> Dict[str, List[Dict[str, Any]]]:
    """Render ``graph`` as a Cytoscape.js elements document."""

    nodes = [{"data": {"id": format_node_key(key), "label": node.label}} for key, node in graph.nodes.items()]
    edges = [
        {
            "data": {
                "id": format_node_key(edge.key),
                "label": edge.relation_label,
                "source": format_node_key(edge.source),
                "target": format_node_key(edge.target),
            }
        }
        for edge in graph.edges
    ]
    return {"nodes": nodes, "edges": edges}


def escape_dot(value: str) -> str:
    """Escape a string for use inside a double-quoted DOT identifier."""

    return (
        value.replace("\\", "\\\\")
        .replace("\"", "\\\"")
        .replace("\r", "")
        .replace("\n", "\\n")
    )


def to_dot(graph: Graph, name: str = "GoCam") -> str:
    """Render ``graph`` as a GraphViz ``digraph``.

    Nodes are labelled by their enabler when one is known, otherwise by
    their own label; edges carry the relation label.
    """

    lines = [f"digraph \"{escape_dot(name)}\" {{"]
    for key, node in graph.nodes.items():
        lines.append(f"  \"{escape_dot(format_node_key(key))}\" [label=\"{escape_dot(node.display_label)}\"];")
    for edge in graph.edges:
        source = escape_dot(format_node_key(edge.source))
        target = escape_dot(format_node_key(edge.target))
        lines.append(f"  \"{source}\" -> \"{target}\" [label=\"{escape_dot(edge.relation_label)}\"];")
    lines.append("}")
    return "\n".join(lines)


__all__ = ["escape_dot", "to_cytoscape", "to_dot"]
