"""Core data models for GO-CAM causal-activity graphs.

Parsed models (:class:`Individual`, :class:`Fact`, :class:`GoCamModel`) are
plain immutable records handed over by the parser.  The derived graph types
(:class:`Node`, :class:`Edge`, :class:`Graph`) are produced in a single
builder pass and are never mutated afterwards; analyses only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional, Tuple


NO_ID = "NO_ID"
NO_LABEL = "NO_LABEL"
UNKNOWN_LABEL = "UNKNOWN"

# (originating model id, individual id); the model id is ``None`` until a
# graph takes part in a merge.
NodeKey = Tuple[Optional[str], str]


class Category(str, Enum):
    """Semantic categories assigned by the classifier."""

    ACTIVITY = "activity"
    COMPONENT = "component"
    PROCESS = "process"
    COMPLEX = "complex"
    CHEMICAL = "chemical"
    UNKNOWN_PROTEIN = "unknown_protein"
    OTHER = "other"


class NodeType(str, Enum):
    """Tagged variant of a graph node."""

    UNKNOWN = "unknown"
    CHEMICAL = "chemical"
    UNKNOWN_MRNA = "unknown_mrna"
    MRNA = "mrna"
    GENE = "gene"
    MODIFIED_PROTEIN = "modified_protein"
    ACTIVITY = "activity"


class EnablerKind(str, Enum):
    """What carries out an activity."""

    GENE = "gene"
    CHEMICAL = "chemical"
    MODIFIED_PROTEIN = "modified_protein"
    COMPLEX = "complex"


@dataclass(frozen=True, slots=True)
class IndividualType:
    """One ``type`` entry of an individual."""

    type_string: str = "class"
    id: Optional[str] = None
    label: Optional[str] = None

    def label_or_id(self) -> str:
        return self.label or self.id or self.type_string

    def id_or_type(self) -> str:
        return self.id or self.type_string


@dataclass(frozen=True, slots=True)
class Individual:
    """A typed entity instance within a model."""

    id: str
    types: Tuple[IndividualType, ...] = ()
    root_types: Tuple[IndividualType, ...] = ()

    @property
    def primary_type(self) -> IndividualType | None:
        return self.types[0] if self.types else None

    @property
    def primary_type_id(self) -> str | None:
        primary = self.primary_type
        return primary.id if primary else None


@dataclass(frozen=True, slots=True)
class Fact:
    """A directed, labelled relation between two individuals."""

    subject: str
    object: str
    property: str
    property_label: str
    fact_id: Optional[str] = None

    @property
    def id(self) -> str:
        if self.fact_id:
            return self.fact_id
        return f"{self.subject}-{self.property}-{self.object}"


@dataclass(slots=True)
class GoCamModel:
    """A parsed model: metadata plus ordered individuals and facts."""

    id: str
    title: str = ""
    taxon: str = ""
    individuals: Tuple[Individual, ...] = ()
    facts: Tuple[Fact, ...] = ()
    _index: Dict[str, Individual] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.individuals = tuple(self.individuals)
        self.facts = tuple(self.facts)
        self._index = {individual.id: individual for individual in self.individuals}

    def individual(self, individual_id: str) -> Individual | None:
        return self._index.get(individual_id)

    def fact_subject(self, fact: Fact) -> Individual | None:
        return self._index.get(fact.subject)

    def fact_object(self, fact: Fact) -> Individual | None:
        return self._index.get(fact.object)


@dataclass(frozen=True, slots=True)
class Enabler:
    """The gene, chemical, modified protein or complex enabling an activity."""

    kind: EnablerKind
    type: IndividualType
    parts: Tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.type.id_or_type()

    @property
    def label(self) -> str:
        return self.type.label or UNKNOWN_LABEL


@dataclass(frozen=True, slots=True)
class Node:
    """A derived graph node, one per qualifying individual."""

    individual_id: str
    id: str
    label: str
    node_type: NodeType = NodeType.UNKNOWN
    enabler: Optional[Enabler] = None
    has_input: Tuple[IndividualType, ...] = ()
    has_output: Tuple[IndividualType, ...] = ()
    part_of_process: Optional[IndividualType] = None
    occurs_in: Tuple[IndividualType, ...] = ()
    located_in: Tuple[IndividualType, ...] = ()
    happens_during: Optional[IndividualType] = None
    model_id: Optional[str] = None
    model_title: Optional[str] = None
    from_activity: bool = False

    @property
    def key(self) -> NodeKey:
        return (self.model_id, self.individual_id)

    @property
    def is_activity(self) -> bool:
        """``True`` for nodes built from a molecular-function individual."""

        return self.from_activity or self.node_type is NodeType.ACTIVITY

    @property
    def enabler_label(self) -> str:
        return self.enabler.label if self.enabler else ""

    @property
    def display_label(self) -> str:
        return self.enabler.label if self.enabler else self.label

    def as_dict(self) -> dict[str, object]:
        return {
            "individual_id": self.individual_id,
            "id": self.id,
            "label": self.label,
            "node_type": self.node_type.value,
            "enabler": None
            if self.enabler is None
            else {
                "kind": self.enabler.kind.value,
                "id": self.enabler.id,
                "label": self.enabler.label,
                "parts": list(self.enabler.parts),
            },
            "has_input": [item.label_or_id() for item in self.has_input],
            "has_output": [item.label_or_id() for item in self.has_output],
            "part_of_process": self.part_of_process.label_or_id() if self.part_of_process else None,
            "occurs_in": [item.label_or_id() for item in self.occurs_in],
            "located_in": [item.label_or_id() for item in self.located_in],
            "happens_during": self.happens_during.label_or_id() if self.happens_during else None,
            "model_id": self.model_id,
            "model_title": self.model_title,
        }


@dataclass(frozen=True, slots=True)
class Edge:
    """A relation between two nodes, carried over from one fact."""

    fact_id: str
    relation_id: str
    relation_label: str
    source: NodeKey
    target: NodeKey
    model_id: Optional[str] = None

    @property
    def key(self) -> Tuple[Optional[str], str]:
        return (self.model_id, self.fact_id)


@dataclass(frozen=True, slots=True)
class Graph:
    """Nodes and edges of one model, or of a merge of several."""

    model_id: str
    title: str = ""
    taxon: str = ""
    nodes: Mapping[NodeKey, Node] = field(default_factory=dict)
    edges: Tuple[Edge, ...] = ()

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def node(self, key: NodeKey) -> Node | None:
        return self.nodes.get(key)

    def activities(self) -> Iterator[Node]:
        return (node for node in self.nodes.values() if node.is_activity)


@dataclass(frozen=True, slots=True)
class OverlapRecord:
    """A node shared by several independently authored models."""

    node_id: str
    label: str
    node_type: NodeType
    models: Tuple[Tuple[str, str], ...]
    part_of_process: Tuple[str, ...] = ()
    occurs_in: Tuple[str, ...] = ()
    located_in: Tuple[str, ...] = ()

    @property
    def model_ids(self) -> Tuple[str, ...]:
        return tuple(model_id for model_id, _ in self.models)


def format_node_key(key: NodeKey) -> str:
    """Render a storage key as a single string identifier."""

    model_id, individual_id = key
    if model_id is None:
        return individual_id
    return f"{model_id}/{individual_id}"


def id_prefix(identifier: str | None) -> str:
    """Return the namespace prefix of a CURIE including the colon."""

    if not identifier or ":" not in identifier:
        return ""
    prefix, _ = identifier.split(":", 1)
    return f"{prefix}:"
