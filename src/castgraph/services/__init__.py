# src/castgraph/services/__init__.py
"""Application services."""

from .relationship_graph import AnalysisResult, RelationshipGraphService

__all__ = ["AnalysisResult", "RelationshipGraphService"]
