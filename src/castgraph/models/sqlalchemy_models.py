# src/castgraph/models/sqlalchemy_models.py
"""SQLAlchemy ORM models for persisted relationship analyses."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    JSON,
    TIMESTAMP,
    Column,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.sql import func

from .base import Base


class CharacterRelationshipSQL(Base):
    """Undirected relationship between two characters of a project.

    Rows are owned by a project and replaced wholesale whenever the project's
    relationships are re-analyzed.  ``character1`` and ``character2`` hold the
    canonical (sorted) pair, so the unique constraint rejects duplicate edges
    regardless of mention order.  ``scenes`` stores the sequence numbers in
    which both characters co-occur.
    """

    __tablename__ = "character_relationship"
    __table_args__ = (
        UniqueConstraint(
            "project_id", "character1", "character2", name="uq_relationship_pair"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(String(64), nullable=False, index=True)
    character1 = Column(Text, nullable=False)
    character2 = Column(Text, nullable=False)
    strength = Column(Float, nullable=False, default=0.0)
    scenes = Column(JSON, nullable=False, default=list)
    relationship_type = Column(String(20), nullable=False, default="neutral")
    description = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())


class RelationshipAnalysisSQL(Base):
    """Marker that a project has a persisted relationship analysis.

    The absence of a row means no analysis has been run (or it was cleared);
    ``analysis_method`` records which extractor produced the stored set.
    """

    __tablename__ = "relationship_analysis"

    project_id = Column(String(64), primary_key=True)
    analysis_method = Column(String(16), nullable=False)
    relationship_count = Column(Integer, nullable=False, default=0)
    analyzed_at = Column(TIMESTAMP(timezone=True), nullable=False)


__all__ = ["CharacterRelationshipSQL", "RelationshipAnalysisSQL"]
