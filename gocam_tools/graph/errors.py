"""Exceptions raised while loading and analysing GO-CAM models."""

from __future__ import annotations


class GoCamError(Exception):
    """Base class for all model-processing errors."""


class UpstreamParseError(GoCamError):
    """A model document could not be read or does not match the schema."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to parse model from {source}: {reason}")
        self.source = source
        self.reason = reason


class UnrecognizedRelation(GoCamError):
    """An ``enabled by`` object whose id namespace is not in the prefix table."""

    def __init__(self, individual_id: str, type_id: str | None) -> None:
        super().__init__(f"Can't handle enabled by object: {individual_id} ({type_id or 'no type id'})")
        self.individual_id = individual_id
        self.type_id = type_id


class EmptyMergeInput(GoCamError):
    """``merge_models`` was called without any graphs."""

    def __init__(self) -> None:
        super().__init__("merge_models requires at least one model")


__all__ = ["EmptyMergeInput", "GoCamError", "UnrecognizedRelation", "UpstreamParseError"]
