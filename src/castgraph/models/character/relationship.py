# src/castgraph/models/character/relationship.py
"""Data models for inferred character relationships."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field, field_validator, model_validator

from castgraph.core.name_utils import canonical_pair, name_key, pair_key

from ..base_model import CastGraphBaseModel
from ..validators import clamp_unit


class RelationshipType(Enum):
    """Nature of the bond between two characters.

    The keyword extractor only emits ``ALLIES``, ``ENEMIES`` and ``NEUTRAL``;
    ``ROMANTIC`` and ``FAMILY`` come from the AI suggester.
    """

    ALLIES = "allies"
    ENEMIES = "enemies"
    NEUTRAL = "neutral"
    ROMANTIC = "romantic"
    FAMILY = "family"


class AnalysisMethod(Enum):
    """Which extractor produced a persisted relationship batch."""

    AI = "ai"
    KEYWORD = "keyword"


class Relationship(CastGraphBaseModel):
    """Undirected relationship between two characters."""

    character1: str = Field(..., min_length=1)
    character2: str = Field(..., min_length=1)
    strength: float = Field(default=0.0, ge=0, le=1)
    scenes: list[int] = Field(default_factory=list)
    type: RelationshipType = RelationshipType.NEUTRAL
    description: str | None = None

    @field_validator("scenes", mode="after")
    @classmethod
    def _dedupe_scenes(cls, v: list[int]) -> list[int]:
        return sorted(set(v))

    @model_validator(mode="after")
    def _canonicalize_pair(self) -> Relationship:
        first, second = canonical_pair(self.character1, self.character2)
        if name_key(first) == name_key(second):
            raise ValueError(f"relationship cannot pair {first!r} with itself")
        if (first, second) != (self.character1, self.character2):
            # Bypass validate_assignment to avoid re-entering this validator.
            object.__setattr__(self, "character1", first)
            object.__setattr__(self, "character2", second)
        return self

    @property
    def pair_key(self) -> tuple[str, str]:
        """Case-insensitive, order-independent identity of the pair."""
        return pair_key(self.character1, self.character2)

    def involves(self, name: str) -> bool:
        """Return ``True`` when ``name`` is one of the two endpoints."""
        return name_key(name) in self.pair_key

    def other(self, name: str) -> str:
        """Return the endpoint that is not ``name``."""
        if name_key(name) == name_key(self.character1):
            return self.character2
        return self.character1


class RelationshipBatch(CastGraphBaseModel):
    """The persisted relationship set of one project."""

    project_id: str = Field(..., min_length=1)
    relationships: list[Relationship] = Field(default_factory=list)
    analysis_method: AnalysisMethod = AnalysisMethod.KEYWORD
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _unique_pairs(self) -> RelationshipBatch:
        seen: set[tuple[str, str]] = set()
        for rel in self.relationships:
            if rel.pair_key in seen:
                raise ValueError(
                    f"duplicate relationship {rel.character1!r} / {rel.character2!r}"
                )
            seen.add(rel.pair_key)
        return self


class RelationshipSuggestion(CastGraphBaseModel):
    """One relationship as proposed by the AI suggester.

    Validation is forgiving: unknown types become ``neutral`` and
    out-of-range strengths are clamped.
    """

    character1: str = Field(..., min_length=1)
    character2: str = Field(..., min_length=1)
    strength: float = 0.5
    type: RelationshipType = RelationshipType.NEUTRAL
    description: str | None = None

    @field_validator("character1", "character2", mode="before")
    @classmethod
    def _strip_names(cls, v: object) -> str:
        return str(v).strip() if v is not None else ""

    @field_validator("strength", mode="before")
    @classmethod
    def _clamp_strength(cls, v: object) -> float:
        return clamp_unit(v)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: object) -> RelationshipType:
        if isinstance(v, RelationshipType):
            return v
        lowered = str(v or "").strip().lower()
        for member in RelationshipType:
            if lowered in {member.value, member.name.lower()}:
                return member
        # Singular spellings are common in model output.
        aliases = {"ally": RelationshipType.ALLIES, "enemy": RelationshipType.ENEMIES}
        return aliases.get(lowered, RelationshipType.NEUTRAL)


__all__ = [
    "RelationshipType",
    "AnalysisMethod",
    "Relationship",
    "RelationshipBatch",
    "RelationshipSuggestion",
]
