import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typing import Any, Dict, List, Optional

import pytest

from gocam_tools.config import AnalysisConfig
from gocam_tools.graph.builder import build_graph
from gocam_tools.graph.models import GoCamModel, Graph
from gocam_tools.graph.parser import parse_model


MOLECULAR_FUNCTION = {"type": "class", "id": "GO:0003674", "label": "molecular_function"}
BIOLOGICAL_PROCESS = {"type": "class", "id": "GO:0008150", "label": "biological_process"}
CELLULAR_COMPONENT = {"type": "class", "id": "GO:0005575", "label": "cellular_component"}
PROTEIN_COMPLEX = {"type": "class", "id": "GO:0032991", "label": "protein-containing complex"}
CHEMICAL_ENTITY = {"type": "class", "id": "CHEBI:24431", "label": "chemical entity"}

RELATIONS = {
    "enabled by": "RO:0002333",
    "has input": "RO:0002233",
    "has output": "RO:0002234",
    "occurs in": "BFO:0000066",
    "located in": "RO:0001025",
    "part of": "BFO:0000050",
    "happens during": "RO:0002092",
    "has part": "BFO:0000051",
    "directly positively regulates": "RO:0002629",
    "provides input for": "RO:0002413",
    "causally upstream of": "RO:0002411",
}


class ModelDocument:
    """Builder for minimal GO-CAM JSON documents used across the tests."""

    def __init__(self, model_id: str = "gomodel:0001", title: str = "test model", taxon: str = "NCBITaxon:4896"):
        self.model_id = model_id
        self.title = title
        self.taxon = taxon
        self.individuals: List[Dict[str, Any]] = []
        self.facts: List[Dict[str, Any]] = []

    def individual(
        self,
        individual_id: str,
        type_id: Optional[str],
        label: Optional[str] = None,
        roots: Optional[List[Dict[str, str]]] = None,
    ) -> str:
        types = [] if type_id is None else [{"type": "class", "id": type_id, "label": label}]
        self.individuals.append({"id": individual_id, "type": types, "root-type": list(roots or [])})
        return individual_id

    def activity(self, individual_id: str, type_id: str = "GO:0004672", label: str = "protein kinase activity") -> str:
        return self.individual(individual_id, type_id, label, [MOLECULAR_FUNCTION])

    def gene(self, individual_id: str, gene_id: str, label: Optional[str] = None) -> str:
        return self.individual(individual_id, gene_id, label or gene_id.split(":", 1)[-1], [CHEMICAL_ENTITY])

    def chemical(self, individual_id: str, chebi_id: str, label: str) -> str:
        return self.individual(individual_id, chebi_id, label, [CHEMICAL_ENTITY])

    def process(self, individual_id: str, type_id: str = "GO:0008150", label: str = "biological_process") -> str:
        return self.individual(individual_id, type_id, label, [BIOLOGICAL_PROCESS])

    def component(self, individual_id: str, type_id: str = "GO:0005634", label: str = "nucleus") -> str:
        return self.individual(individual_id, type_id, label, [CELLULAR_COMPONENT])

    def fact(self, subject: str, label: str, obj: str) -> None:
        self.facts.append(
            {
                "subject": subject,
                "object": obj,
                "property": RELATIONS.get(label, "RO:0000000"),
                "property-label": label,
            }
        )

    def complete_activity(self, prefix: str, gene_id: str) -> str:
        """An activity with enabler, process, input, output and location."""

        activity = self.activity(f"{prefix}-activity")
        self.fact(activity, "enabled by", self.gene(f"{prefix}-gene", gene_id))
        self.fact(activity, "part of", self.process(f"{prefix}-process"))
        self.fact(activity, "has input", self.chemical(f"{prefix}-input", "CHEBI:15422", "ATP"))
        self.fact(activity, "has output", self.chemical(f"{prefix}-output", "CHEBI:16761", "ADP"))
        self.fact(activity, "occurs in", self.component(f"{prefix}-location"))
        return activity

    def payload(self) -> Dict[str, Any]:
        return {
            "id": self.model_id,
            "individuals": list(self.individuals),
            "facts": list(self.facts),
            "annotations": [
                {"key": "title", "value": self.title},
                {"key": "in_taxon", "value": self.taxon},
                {"key": "state", "value": "production"},
            ],
        }

    def model(self) -> GoCamModel:
        return parse_model(self.payload())

    def graph(self, config: AnalysisConfig | None = None) -> Graph:
        return build_graph(self.model(), config)


@pytest.fixture()
def make_document():
    return ModelDocument


@pytest.fixture()
def pathway_document() -> ModelDocument:
    """Two gene-enabled activities linked causally plus an isolated one."""

    doc = ModelDocument("gomodel:pathway", "kinase cascade")
    first = doc.complete_activity("a1", "PomBase:SPAC1.01")
    second = doc.complete_activity("a2", "PomBase:SPAC2.02")
    third = doc.activity("a3")
    doc.fact(third, "enabled by", doc.gene("a3-gene", "PomBase:SPAC3.03"))
    fourth = doc.activity("a4")
    doc.fact(fourth, "enabled by", doc.gene("a4-gene", "PomBase:SPAC1.01"))
    doc.fact(first, "directly positively regulates", second)
    return doc
