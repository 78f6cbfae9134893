# src/castgraph/core/__init__.py
"""Core utilities for CastGraph."""

from .errors import (
    CastGraphError,
    DuplicateRelationshipError,
    LLMConfigurationError,
    RelationshipSaveError,
    SuggesterError,
)
from .logging import get_logger, init_logging, log_calls

__all__ = [
    "get_logger",
    "init_logging",
    "log_calls",
    "CastGraphError",
    "DuplicateRelationshipError",
    "LLMConfigurationError",
    "RelationshipSaveError",
    "SuggesterError",
]
