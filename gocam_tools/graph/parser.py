"""Read Minerva/Noctua GO-CAM JSON documents into :class:`GoCamModel` objects.

Only the parts of the document the analyses need are validated: model
annotations (``title``, ``in_taxon``), individuals with their ``type`` and
``root-type`` lists, and facts.  Unknown keys are ignored.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import UpstreamParseError
from .models import Fact, GoCamModel, Individual, IndividualType


class RawAnnotation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str
    value: Any = None


class RawType(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = "class"
    id: Optional[str] = None
    label: Optional[str] = None

    def to_domain(self) -> IndividualType:
        return IndividualType(type_string=self.type, id=self.id, label=self.label)


class RawIndividual(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    type: List[RawType] = Field(default_factory=list)
    root_type: List[RawType] = Field(default_factory=list, alias="root-type")

    def to_domain(self) -> Individual:
        return Individual(
            id=self.id,
            types=tuple(item.to_domain() for item in self.type),
            root_types=tuple(item.to_domain() for item in self.root_type),
        )


class RawFact(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    subject: str
    object: str
    property: str
    property_label: str = Field(default="", alias="property-label")
    id: Optional[str] = None

    def to_domain(self) -> Fact:
        return Fact(
            subject=self.subject,
            object=self.object,
            property=self.property,
            property_label=self.property_label or self.property,
            fact_id=self.id,
        )


class RawModel(BaseModel):
    """Pydantic view of a GO-CAM JSON document."""

    model_config = ConfigDict(extra="ignore")

    id: str
    individuals: List[RawIndividual] = Field(default_factory=list)
    facts: List[RawFact] = Field(default_factory=list)
    annotations: List[RawAnnotation] = Field(default_factory=list)

    def annotation(self, key: str) -> str:
        for annotation in self.annotations:
            if annotation.key == key and annotation.value is not None:
                return str(annotation.value)
        return ""

    def to_domain(self) -> GoCamModel:
        return GoCamModel(
            id=self.id,
            title=self.annotation("title"),
            taxon=self.annotation("in_taxon"),
            individuals=tuple(individual.to_domain() for individual in self.individuals),
            facts=tuple(fact.to_domain() for fact in self.facts),
        )


def parse_model(payload: Mapping[str, Any] | RawModel, source: str = "<memory>") -> GoCamModel:
    """Validate ``payload`` and convert it to a :class:`GoCamModel`."""

    if isinstance(payload, RawModel):
        return payload.to_domain()
    try:
        raw = RawModel.model_validate(payload)
    except ValidationError as exc:
        raise UpstreamParseError(source, f"{exc.error_count()} validation error(s)") from exc
    return raw.to_domain()


def parse_model_json(text: str, source: str = "<memory>") -> GoCamModel:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UpstreamParseError(source, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(payload, dict):
        raise UpstreamParseError(source, "top-level JSON value is not an object")
    return parse_model(payload, source=source)


def load_model(path: Path | str) -> GoCamModel:
    """Read and parse the model stored at ``path``.

    I/O errors propagate unchanged; malformed content raises
    :class:`UpstreamParseError`.
    """

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return parse_model_json(text, source=str(path))


__all__ = ["RawModel", "load_model", "parse_model", "parse_model_json"]
