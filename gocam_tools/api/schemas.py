"""Pydantic schemas used by the public API surface."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..graph.connectivity import ModelStats
from ..graph.models import Graph, Node, OverlapRecord
from ..graph.parser import RawModel


class ErrorPayload(BaseModel):
    """Standard error envelope returned by API endpoints."""

    code: str = Field(..., description="Machine readable error identifier")
    message: str = Field(..., description="Human readable explanation")
    context: Dict[str, Any] = Field(default_factory=dict, description="Additional context")


class ModelRequest(BaseModel):
    """A single GO-CAM JSON document."""

    model: RawModel


class ModelsRequest(BaseModel):
    """Several GO-CAM JSON documents analysed together."""

    models: List[RawModel] = Field(default_factory=list)
    merged_id: str = Field(default="merged", description="Identifier of the merged graph")
    merged_title: str = Field(default="merged models", description="Title of the merged graph")


class StatsResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    title: str
    taxon: str
    total_genes: int
    total_complexes: int
    max_connected_activities: int
    total_connected_activities: int
    number_of_holes: int

    @classmethod
    def from_domain(cls, graph: Graph, stats: ModelStats) -> "StatsResponse":
        return cls(model_id=graph.model_id, title=graph.title, taxon=graph.taxon, **stats.as_dict())


class EnablerView(BaseModel):
    kind: str
    id: str
    label: str
    parts: List[str] = Field(default_factory=list)


class NodeView(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    individual_id: str
    id: str
    label: str
    node_type: str
    enabler: EnablerView | None = None
    has_input: List[str] = Field(default_factory=list)
    has_output: List[str] = Field(default_factory=list)
    part_of_process: str | None = None
    occurs_in: List[str] = Field(default_factory=list)
    located_in: List[str] = Field(default_factory=list)
    happens_during: str | None = None
    model_id: str | None = None
    model_title: str | None = None
    missing: List[str] = Field(default_factory=list, description="Absent annotations for holes")

    @classmethod
    def from_domain(cls, node: Node, missing: List[str] | None = None) -> "NodeView":
        payload = node.as_dict()
        return cls(**payload, missing=list(missing or []))


class HolesResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    holes: List[NodeView] = Field(default_factory=list)


class ConnectedGenesResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    buckets: Dict[int, List[str]] = Field(default_factory=dict)


class OverlapView(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    node_id: str
    label: str
    node_type: str
    model_ids: List[str]
    model_titles: List[str]
    part_of_process: List[str] = Field(default_factory=list)
    occurs_in: List[str] = Field(default_factory=list)
    located_in: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, record: OverlapRecord) -> "OverlapView":
        return cls(
            node_id=record.node_id,
            label=record.label,
            node_type=record.node_type.value,
            model_ids=[model_id for model_id, _ in record.models],
            model_titles=[title for _, title in record.models],
            part_of_process=list(record.part_of_process),
            occurs_in=list(record.occurs_in),
            located_in=list(record.located_in),
        )


class OverlapsResponse(BaseModel):
    overlaps: List[OverlapView] = Field(default_factory=list)


class CytoscapeResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    elements: Dict[str, List[Dict[str, Any]]]


class DotResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    dot: str


__all__ = [
    "ConnectedGenesResponse",
    "CytoscapeResponse",
    "DotResponse",
    "ErrorPayload",
    "HolesResponse",
    "ModelRequest",
    "ModelsRequest",
    "NodeView",
    "OverlapView",
    "OverlapsResponse",
    "StatsResponse",
]
