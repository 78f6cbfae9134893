# src/castgraph/analysis/__init__.py
"""Relationship extraction from scene text."""

from .ai import ExtractionOutcome, RelationshipSuggester, extract_via_ai
from .candidates import candidate_names, mine_names
from .extractor import extract_relationships
from .graph import characters_in, filter_relationships, relationships_for

__all__ = [
    "ExtractionOutcome",
    "RelationshipSuggester",
    "extract_via_ai",
    "candidate_names",
    "mine_names",
    "extract_relationships",
    "characters_in",
    "filter_relationships",
    "relationships_for",
]
