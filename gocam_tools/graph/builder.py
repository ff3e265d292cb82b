"""Turn a parsed model into a typed graph of activities and chemicals.

The builder works in three steps:

1. select the qualifying individuals (activities and non-placeholder
   chemicals) and open an evidence accumulator for each;
2. scan the facts once, in document order, routing each fact about a
   qualifying subject into its accumulator;
3. freeze every accumulator into an immutable :class:`Node` and add one
   :class:`Edge` per fact whose subject and object are both nodes.

Facts that point at individuals outside the node set only contribute node
attributes; facts whose individuals are missing entirely are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from .classifier import classify, enabler_kind, is_gene_id, is_graph_node
from .errors import UnrecognizedRelation
from .models import (
    NO_ID,
    NO_LABEL,
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
    NodeKey,
    NodeType,
)

LOGGER = logging.getLogger(__name__)

ENABLED_BY = "enabled by"
HAS_INPUT = "has input"
HAS_OUTPUT = "has output"
LOCATED_IN = "located in"
OCCURS_IN = "occurs in"
PART_OF = "part of"
HAPPENS_DURING = "happens during"
HAS_PART = "has part"


@dataclass(slots=True)
class _NodeEvidence:
    """Everything learned about one qualifying individual during the scan."""

    individual: Individual
    is_activity: bool
    enabler: Optional[Enabler] = None
    has_input: List[IndividualType] = field(default_factory=list)
    has_output: List[IndividualType] = field(default_factory=list)
    located_in: List[IndividualType] = field(default_factory=list)
    occurs_in: List[IndividualType] = field(default_factory=list)
    part_of_process: Optional[IndividualType] = None
    happens_during: Optional[IndividualType] = None

    def freeze(self) -> Node:
        primary = self.individual.primary_type or IndividualType()
        if self.enabler is not None:
            node_type = NodeType.ACTIVITY
        elif self.is_activity:
            node_type = NodeType.UNKNOWN
        else:
            node_type = NodeType.CHEMICAL
        return Node(
            individual_id=self.individual.id,
            id=primary.id or NO_ID,
            label=primary.label or NO_LABEL,
            node_type=node_type,
            enabler=self.enabler,
            has_input=tuple(self.has_input),
            has_output=tuple(self.has_output),
            part_of_process=self.part_of_process,
            occurs_in=tuple(self.occurs_in),
            located_in=tuple(self.located_in),
            happens_during=self.happens_during,
            from_activity=self.is_activity,
        )


class GraphBuilder:
    """Build :class:`Graph` objects using a shared configuration."""

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or DEFAULT_ANALYSIS_CONFIG

    def build(self, model: GoCamModel) -> Graph:
        evidence = self._collect_individuals(model)
        complex_parts = self._complex_parts(model)
        for fact in model.facts:
            subject = evidence.get(fact.subject)
            if subject is None:
                continue
            obj = model.fact_object(fact)
            if obj is None or obj.primary_type is None:
                continue
            self._apply_fact(model, subject, fact, obj, obj.primary_type, complex_parts)

        nodes: Dict[NodeKey, Node] = {}
        for accumulator in evidence.values():
            node = accumulator.freeze()
            nodes[node.key] = node

        edges: List[Edge] = []
        for fact in model.facts:
            source: NodeKey = (None, fact.subject)
            target: NodeKey = (None, fact.object)
            if source in nodes and target in nodes:
                edges.append(
                    Edge(
                        fact_id=fact.id,
                        relation_id=fact.property,
                        relation_label=fact.property_label,
                        source=source,
                        target=target,
                    )
                )

        LOGGER.debug("Built graph for %s: %d nodes, %d edges", model.id, len(nodes), len(edges))
        return Graph(model_id=model.id, title=model.title, taxon=model.taxon, nodes=nodes, edges=tuple(edges))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _collect_individuals(self, model: GoCamModel) -> Dict[str, _NodeEvidence]:
        evidence: Dict[str, _NodeEvidence] = {}
        for individual in model.individuals:
            categories = classify(individual)
            if Category.OTHER in categories:
                LOGGER.debug("Skipping unclassified individual %s in %s", individual.id, model.id)
                continue
            if not is_graph_node(individual):
                continue
            evidence[individual.id] = _NodeEvidence(
                individual=individual,
                is_activity=Category.ACTIVITY in categories,
            )
        return evidence

    def _complex_parts(self, model: GoCamModel) -> Dict[str, List[str]]:
        parts: Dict[str, List[str]] = {}
        for fact in model.facts:
            if fact.property_label != HAS_PART:
                continue
            part = model.fact_object(fact)
            part_id = part.primary_type_id if part else None
            if not part_id or not is_gene_id(part_id, self.config.gene_prefixes):
                continue
            members = parts.setdefault(fact.subject, [])
            if part_id not in members:
                members.append(part_id)
        return parts

    def _apply_fact(
        self,
        model: GoCamModel,
        subject: _NodeEvidence,
        fact: Fact,
        obj: Individual,
        object_type: IndividualType,
        complex_parts: Dict[str, List[str]],
    ) -> None:
        label = fact.property_label
        if label == ENABLED_BY:
            self._apply_enabler(model, subject, obj, object_type, complex_parts)
        elif label == HAS_INPUT:
            subject.has_input.append(object_type)
        elif label == HAS_OUTPUT:
            subject.has_output.append(object_type)
        elif label == LOCATED_IN:
            subject.located_in.append(object_type)
        elif label == OCCURS_IN:
            subject.occurs_in.append(object_type)
        elif label == PART_OF:
            if subject.part_of_process is None:
                subject.part_of_process = object_type
            else:
                LOGGER.debug("Ignoring additional part of fact %s in %s", fact.id, model.id)
        elif label == HAPPENS_DURING:
            if subject.happens_during is None:
                subject.happens_during = object_type
            else:
                LOGGER.debug("Ignoring additional happens during fact %s in %s", fact.id, model.id)

    def _apply_enabler(
        self,
        model: GoCamModel,
        subject: _NodeEvidence,
        obj: Individual,
        object_type: IndividualType,
        complex_parts: Dict[str, List[str]],
    ) -> None:
        try:
            kind = enabler_kind(obj, self.config.gene_prefixes)
        except UnrecognizedRelation as exc:
            LOGGER.warning("%s in model %s", exc, model.id)
            return
        if subject.enabler is not None:
            LOGGER.debug(
                "Activity %s in %s already enabled by %s; ignoring %s",
                subject.individual.id,
                model.id,
                subject.enabler.id,
                obj.id,
            )
            return
        parts = tuple(complex_parts.get(obj.id, ())) if kind is EnablerKind.COMPLEX else ()
        subject.enabler = Enabler(kind=kind, type=object_type, parts=parts)


def build_graph(model: GoCamModel, config: AnalysisConfig | None = None) -> Graph:
    """Build the typed graph for ``model``."""

    return GraphBuilder(config).build(model)


__all__ = [
    "ENABLED_BY",
    "GraphBuilder",
    "HAPPENS_DURING",
    "HAS_INPUT",
    "HAS_OUTPUT",
    "HAS_PART",
    "LOCATED_IN",
    "OCCURS_IN",
    "PART_OF",
    "build_graph",
]
