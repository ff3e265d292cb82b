"""Detection of under-specified activities ("holes")."""

from __future__ import annotations

from typing import Iterator, Tuple

from .models import Graph, Node


ENABLER = "enabler"
PROCESS = "process"
INPUT = "input"
OUTPUT = "output"
LOCATION = "location"


def missing_annotations(node: Node) -> Tuple[str, ...]:
    """Names of the expected annotations absent from an activity node."""

    missing = []
    if node.enabler is None:
        missing.append(ENABLER)
    if node.part_of_process is None:
        missing.append(PROCESS)
    if not node.has_input:
        missing.append(INPUT)
    if not node.has_output:
        missing.append(OUTPUT)
    if not node.occurs_in and not node.located_in:
        missing.append(LOCATION)
    return tuple(missing)


def is_hole(node: Node) -> bool:
    return node.is_activity and bool(missing_annotations(node))


def find_holes(graph: Graph) -> Iterator[Node]:
    """Yield activity nodes lacking an enabler, process, input, output or location.

    Nodes are produced lazily in graph order; every call starts a fresh
    pass and the graph is left untouched.
    """

    for node in graph.nodes.values():
        if is_hole(node):
            yield node


__all__ = ["find_holes", "is_hole", "missing_annotations"]
