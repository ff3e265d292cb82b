"""Load many model files without letting one bad file stop the run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from ..config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from .builder import GraphBuilder
from .errors import UpstreamParseError
from .models import GoCamModel, Graph
from .parser import load_model

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class LoadFailure:
    """A file that could not be turned into a model."""

    path: Path
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(slots=True)
class BatchResult:
    """Models loaded by :func:`load_models` plus the per-file failures."""

    models: List[GoCamModel] = field(default_factory=list)
    failures: List[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def graphs(self, config: AnalysisConfig | None = None) -> List[Graph]:
        builder = GraphBuilder(config)
        return [builder.build(model) for model in self.models]


def load_models(
    paths: Iterable[Path | str],
    *,
    fail_fast: bool | None = None,
    config: AnalysisConfig | None = None,
) -> BatchResult:
    """Parse every path, collecting failures instead of aborting.

    With ``fail_fast`` (defaulting to the configuration's value) the first
    failure is re-raised instead.
    """

    config = config or DEFAULT_ANALYSIS_CONFIG
    if fail_fast is None:
        fail_fast = config.fail_fast

    result = BatchResult()
    for raw_path in paths:
        path = Path(raw_path)
        try:
            model = load_model(path)
        except (UpstreamParseError, OSError, UnicodeDecodeError) as exc:
            if fail_fast:
                raise
            LOGGER.error("Skipping %s: %s", path, exc)
            result.failures.append(LoadFailure(path=path, error=exc))
            continue
        result.models.append(model)
    return result


__all__ = ["BatchResult", "LoadFailure", "load_models"]
