# src/castgraph/models/character/profile.py
"""Data model for a roster character.

Characters are created by the character-management side of the application;
relationship analysis only reads their names.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from ..base_model import CastGraphBaseModel
from ..validators import validate_non_empty


class Character(CastGraphBaseModel):
    """A named character belonging to a project roster."""

    id: int | str | None = Field(default=None)
    name: str = Field(..., min_length=1)
    description: str | None = None
    role: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        # Allow human-readable names; only require non-empty.
        return validate_non_empty(str(v)).strip()


__all__ = ["Character"]
