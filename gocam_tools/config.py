"""Configuration helpers for the analysis toolkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple

import logging
import os


DEFAULT_GENE_PREFIXES: Tuple[str, ...] = (
    "PomBase:",
    "FB:",
    "UniProtKB:",
    "MGI:",
    "RGD:",
    "SGD:",
    "WB:",
    "ZFIN:",
    "TAIR:",
    "dictyBase:",
    "Xenbase:",
)


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    return str(raw).strip().lower() not in {"0", "false", "no", ""}


def _parse_prefixes(raw: str | None) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_GENE_PREFIXES
    prefixes = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        if not token.endswith(":"):
            token = f"{token}:"
        prefixes.append(token)
    return tuple(prefixes) or DEFAULT_GENE_PREFIXES


@dataclass(slots=True)
class AnalysisConfig:
    """Runtime knobs shared by the builder, the batch loader and the CLI.

    ``gene_prefixes`` is the allow-list of institutional gene namespaces
    recognised when resolving ``enabled by`` objects.  ``fail_fast`` makes
    the batch loader re-raise the first per-file failure instead of
    collecting it.
    """

    gene_prefixes: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_GENE_PREFIXES)
    fail_fast: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.gene_prefixes = tuple(self.gene_prefixes)
        self.log_level = (self.log_level or "WARNING").upper()

    @property
    def numeric_log_level(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        prefix: str = "GOCAM_",
    ) -> "AnalysisConfig":
        """Create a configuration object from environment variables.

        ``GOCAM_GENE_PREFIXES``
            Comma separated namespaces, with or without the trailing colon.
        ``GOCAM_FAIL_FAST``
            Abort a batch on the first unreadable model.
        ``GOCAM_LOG_LEVEL``
            Logging level name used by the CLI.
        """

        env = env if env is not None else os.environ
        return cls(
            gene_prefixes=_parse_prefixes(env.get(f"{prefix}GENE_PREFIXES")),
            fail_fast=_parse_bool(env.get(f"{prefix}FAIL_FAST"), False),
            log_level=env.get(f"{prefix}LOG_LEVEL", "WARNING"),
        )


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig.from_env()
