"""FastAPI router exposing the model analyses.

Every endpoint is stateless: the request body carries the GO-CAM JSON
documents, the graphs are built for that request only and nothing is
stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from ..graph.builder import GraphBuilder
from ..graph.connectivity import get_connected_genes, get_stats
from ..graph.errors import EmptyMergeInput
from ..graph.export import to_cytoscape, to_dot
from ..graph.holes import find_holes, missing_annotations
from ..graph.models import Graph
from ..graph.overlaps import find_overlaps, merge_models
from ..graph.parser import RawModel, parse_model
from . import schemas


@dataclass
class ServiceRegistry:
    """Container bundling the dependencies shared by the API routes."""

    config: AnalysisConfig = field(default_factory=lambda: DEFAULT_ANALYSIS_CONFIG)
    builder: GraphBuilder | None = None

    def __post_init__(self) -> None:
        if self.builder is None:
            self.builder = GraphBuilder(self.config)

    def configure(self, *, config: AnalysisConfig | None = None) -> None:
        if config is not None:
            self.config = config
            self.builder = GraphBuilder(config)

    def build(self, raw: RawModel) -> Graph:
        builder = self.builder or GraphBuilder(self.config)
        return builder.build(parse_model(raw, source=raw.id))


services = ServiceRegistry()


def configure_services(*, config: AnalysisConfig | None = None) -> None:
    """Configure the shared service registry used by API routes."""

    services.configure(config=config)


def get_services() -> ServiceRegistry:
    return services


def _http_error(status_code: int, code: str, message: str, *, context: Dict[str, object] | None = None) -> HTTPException:
    payload = schemas.ErrorPayload(code=code, message=message, context=context or {})
    return HTTPException(status_code=status_code, detail=payload.model_dump())


router = APIRouter(prefix="/models", tags=["models"])


@router.post("/stats", response_model=schemas.StatsResponse)
def model_stats(
    request: schemas.ModelRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.StatsResponse:
    graph = svc.build(request.model)
    return schemas.StatsResponse.from_domain(graph, get_stats(graph))


@router.post("/holes", response_model=schemas.HolesResponse)
def model_holes(
    request: schemas.ModelRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.HolesResponse:
    graph = svc.build(request.model)
    holes = [schemas.NodeView.from_domain(node, list(missing_annotations(node))) for node in find_holes(graph)]
    return schemas.HolesResponse(model_id=graph.model_id, holes=holes)


@router.post("/connected-genes", response_model=schemas.ConnectedGenesResponse)
def model_connected_genes(
    request: schemas.ModelRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.ConnectedGenesResponse:
    graph = svc.build(request.model)
    buckets = {count: sorted(genes) for count, genes in get_connected_genes(graph).items()}
    return schemas.ConnectedGenesResponse(model_id=graph.model_id, buckets=buckets)


def _build_all(request: schemas.ModelsRequest, svc: ServiceRegistry) -> List[Graph]:
    return [svc.build(raw) for raw in request.models]


@router.post("/overlaps", response_model=schemas.OverlapsResponse)
def model_overlaps(
    request: schemas.ModelsRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.OverlapsResponse:
    overlaps = find_overlaps(_build_all(request, svc))
    return schemas.OverlapsResponse(overlaps=[schemas.OverlapView.from_domain(record) for record in overlaps])


def _merge(request: schemas.ModelsRequest, svc: ServiceRegistry) -> Graph:
    try:
        return merge_models(request.merged_id, request.merged_title, _build_all(request, svc))
    except EmptyMergeInput as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, "empty_merge_input", str(exc)) from exc


@router.post("/merge", response_model=schemas.CytoscapeResponse)
def model_merge(
    request: schemas.ModelsRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.CytoscapeResponse:
    merged = _merge(request, svc)
    return schemas.CytoscapeResponse(model_id=merged.model_id, elements=to_cytoscape(merged))


@router.post("/dot", response_model=schemas.DotResponse)
def model_dot(
    request: schemas.ModelsRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.DotResponse:
    merged = _merge(request, svc)
    return schemas.DotResponse(model_id=merged.model_id, dot=to_dot(merged))


__all__ = ["ServiceRegistry", "configure_services", "get_services", "router", "services"]
