# src/castgraph/models/responses.py
"""Pydantic models representing structured LLM responses and API payloads."""

from __future__ import annotations

from pydantic import Field, RootModel

from .base_model import CastGraphBaseModel
from .character import AnalysisMethod, Character, Relationship, RelationshipSuggestion
from .story import Scene, StoryContext


class RelationshipSuggestionList(RootModel[list[RelationshipSuggestion]]):
    """List of :class:`RelationshipSuggestion` items."""


class SaveRelationshipsRequest(CastGraphBaseModel):
    """Caller-supplied relationship set to persist as-is."""

    relationships: list[Relationship] = Field(default_factory=list)
    analysis_method: AnalysisMethod = AnalysisMethod.KEYWORD


class AnalyzeRequest(CastGraphBaseModel):
    """Inputs for running relationship analysis on a project."""

    characters: list[Character] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)
    story_context: StoryContext | None = None
    use_ai: bool = False
    force: bool = Field(
        default=False, description="Discard any stored analysis and re-run"
    )


class AnalysisResponse(CastGraphBaseModel):
    """Relationship set returned to API callers."""

    project_id: str
    relationships: list[Relationship] = Field(default_factory=list)
    analysis_method: AnalysisMethod
    warning: str | None = None
    reused: bool = Field(
        default=False, description="True when served from a stored analysis"
    )


class ClearResponse(CastGraphBaseModel):
    """Number of relationships removed by a clear."""

    deleted: int = 0


__all__ = [
    "RelationshipSuggestionList",
    "SaveRelationshipsRequest",
    "AnalyzeRequest",
    "AnalysisResponse",
    "ClearResponse",
]
