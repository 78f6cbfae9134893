# src/castgraph/core/errors.py
"""Exception hierarchy shared across CastGraph components."""

from __future__ import annotations


class CastGraphError(Exception):
    """Base class for all CastGraph errors."""


class LLMConfigurationError(CastGraphError, RuntimeError):
    """Required LLM settings are missing."""


class SuggesterError(CastGraphError):
    """The AI relationship suggester failed or returned an unusable payload."""


class RelationshipSaveError(CastGraphError):
    """Persisting a relationship batch failed; the previous batch is intact."""

    def __init__(self, project_id: str, reason: str) -> None:
        super().__init__(f"Failed to save relationships for project {project_id}: {reason}")
        self.project_id = project_id
        self.reason = reason


class DuplicateRelationshipError(RelationshipSaveError):
    """A batch contained the same character pair more than once."""

    def __init__(self, project_id: str, pair: tuple[str, str]) -> None:
        super().__init__(project_id, f"duplicate pair {pair[0]!r} / {pair[1]!r}")
        self.pair = pair


__all__ = [
    "CastGraphError",
    "LLMConfigurationError",
    "SuggesterError",
    "RelationshipSaveError",
    "DuplicateRelationshipError",
]
