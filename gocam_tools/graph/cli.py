"""Command line helpers for analysing GO-CAM model files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, List, TextIO

from ..config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from .batch import BatchResult, load_models
from .connectivity import get_connected_genes, get_stats
from .errors import GoCamError
from .export import to_cytoscape, to_dot
from .holes import find_holes
from .overlaps import find_overlaps, merge_models
from .reports import (
    CONNECTED_GENE_COLUMNS,
    NODE_COLUMNS,
    OVERLAP_COLUMNS,
    STATS_COLUMNS,
    connected_gene_rows,
    format_row,
    node_rows,
    overlap_row,
    stats_row,
    tuple_rows,
)

MERGED_MODEL_ID = "merged"
MERGED_MODEL_TITLE = "merged models"


def _write_rows(out: TextIO, header, rows) -> None:
    if header:
        print(format_row(header), file=out)
    for row in rows:
        print(format_row(row), file=out)


def _cmd_stats(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    graphs = batch.graphs(config)
    _write_rows(out, STATS_COLUMNS, (stats_row(graph, get_stats(graph)) for graph in graphs))


def _cmd_print_tuples(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    for model in batch.models:
        _write_rows(out, None, tuple_rows(model))


def _cmd_nodes(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    print(format_row(NODE_COLUMNS), file=out)
    for graph in batch.graphs(config):
        _write_rows(out, None, node_rows(graph))


def _cmd_holes(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    print(format_row(NODE_COLUMNS), file=out)
    for graph in batch.graphs(config):
        _write_rows(out, None, node_rows(graph, find_holes(graph)))


def _cmd_connected_genes(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    print(format_row(CONNECTED_GENE_COLUMNS), file=out)
    for graph in batch.graphs(config):
        _write_rows(out, None, connected_gene_rows(graph, get_connected_genes(graph), min_count=args.min_count))


def _cmd_overlaps(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    overlaps = find_overlaps(batch.graphs(config))
    _write_rows(out, OVERLAP_COLUMNS, (overlap_row(record) for record in overlaps))


def _merged(batch: BatchResult, config: AnalysisConfig):
    return merge_models(MERGED_MODEL_ID, MERGED_MODEL_TITLE, batch.graphs(config))


def _cmd_cytoscape(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    print(json.dumps(to_cytoscape(_merged(batch, config)), indent=2), file=out)


def _cmd_dot(args: argparse.Namespace, batch: BatchResult, config: AnalysisConfig, out: TextIO) -> None:
    print(to_dot(_merged(batch, config)), file=out)


COMMANDS: Dict[str, Callable[[argparse.Namespace, BatchResult, AnalysisConfig, TextIO], None]] = {
    "stats": _cmd_stats,
    "print-tuples": _cmd_print_tuples,
    "nodes": _cmd_nodes,
    "holes": _cmd_holes,
    "connected-genes": _cmd_connected_genes,
    "overlaps": _cmd_overlaps,
    "cytoscape": _cmd_cytoscape,
    "dot": _cmd_dot,
}

COMMAND_HELP = {
    "stats": "Per-model gene, complex, connectivity and hole counts",
    "print-tuples": "Print every fact as a subject/property/object row",
    "nodes": "Print every graph node with its annotations",
    "holes": "Print activities missing an enabler, process, input, output or location",
    "connected-genes": "Print genes grouped by the number of connected activities they enable",
    "overlaps": "Print nodes shared by two or more models",
    "cytoscape": "Merge the models and print Cytoscape elements JSON",
    "dot": "Merge the models and print a GraphViz DOT graph",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gocam-tools", description="GO-CAM causal-activity model analysis")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first model that fails to load")
    parser.add_argument("--log-level", default=None, help="Logging level (default from GOCAM_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in COMMAND_HELP.items():
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("paths", nargs="+", type=Path, help="GO-CAM JSON model files")
        if name == "connected-genes":
            sub.add_argument(
                "--min-count",
                type=int,
                default=2,
                help="Only report genes enabling at least this many connected activities",
            )

    return parser


def main(argv: List[str] | None = None, config: AnalysisConfig | None = None, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config or DEFAULT_ANALYSIS_CONFIG
    out = out or sys.stdout

    if args.log_level:
        config = replace(config, log_level=args.log_level)
    logging.basicConfig(
        level=config.numeric_log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.error("Unknown command")
        return 1

    try:
        batch = load_models(args.paths, fail_fast=args.fail_fast or config.fail_fast, config=config)
    except (GoCamError, OSError, UnicodeDecodeError) as exc:
        print(f"failed to load: {exc}", file=sys.stderr)
        return 1
    if batch.models:
        handler(args, batch, config, out)
    for failure in batch.failures:
        print(f"failed to load {failure.path}: {failure.message}", file=sys.stderr)
    return 0 if batch.ok else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
