# src/castgraph/canon/__init__.py
"""Database access helpers for persisted relationship analyses."""

from .crud import RelationshipStore
from .db import SessionLocal, advisory_lock, ensure_schema, get_pg

__all__ = ["RelationshipStore", "SessionLocal", "get_pg", "advisory_lock", "ensure_schema"]
