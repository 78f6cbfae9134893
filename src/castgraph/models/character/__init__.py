# src/castgraph/models/character/__init__.py
"""Models related to character data."""

from .profile import Character
from .relationship import (
    AnalysisMethod,
    Relationship,
    RelationshipBatch,
    RelationshipSuggestion,
    RelationshipType,
)

__all__ = [
    "Character",
    "AnalysisMethod",
    "Relationship",
    "RelationshipBatch",
    "RelationshipSuggestion",
    "RelationshipType",
]
