# src/castgraph/models/__init__.py
"""Pydantic models representing key CastGraph entities."""

from .base import Base  # Import SQLAlchemy Base
from .base_model import CastGraphBaseModel
from .character import (
    AnalysisMethod,
    Character,
    Relationship,
    RelationshipBatch,
    RelationshipSuggestion,
    RelationshipType,
)
from .responses import (
    AnalysisResponse,
    AnalyzeRequest,
    ClearResponse,
    RelationshipSuggestionList,
    SaveRelationshipsRequest,
)
from .sqlalchemy_models import CharacterRelationshipSQL, RelationshipAnalysisSQL
from .story import DirectorSettings, Scene, StoryContext

__all__ = [
    "Base",
    "CastGraphBaseModel",
    "AnalysisMethod",
    "Character",
    "Relationship",
    "RelationshipBatch",
    "RelationshipSuggestion",
    "RelationshipType",
    "RelationshipSuggestionList",
    "SaveRelationshipsRequest",
    "AnalyzeRequest",
    "AnalysisResponse",
    "ClearResponse",
    "CharacterRelationshipSQL",
    "RelationshipAnalysisSQL",
    "DirectorSettings",
    "Scene",
    "StoryContext",
]
