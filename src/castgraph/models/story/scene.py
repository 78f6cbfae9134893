# src/castgraph/models/story/scene.py
"""Data model representing a storyboard scene."""

from __future__ import annotations

from pydantic import Field, field_validator

from ..base_model import CastGraphBaseModel
from ..validators import text_or_empty


class DirectorSettings(CastGraphBaseModel):
    """Camera, lighting and performance notes attached to a scene.

    Only ``dialogue`` feeds relationship analysis; the remaining fields are
    carried so scenes round-trip unchanged through the API.
    """

    custom_scene_id: str = ""
    lens: str = ""
    angle: str = ""
    lighting: str = ""
    movement: str = ""
    zoom: str = ""
    sound: str = ""
    dialogue: str = Field("", description="Spoken lines")
    stunt_instructions: str = ""
    physics_focus: bool = False
    style: str = ""
    transition: str = ""

    @field_validator(
        "custom_scene_id",
        "lens",
        "angle",
        "lighting",
        "movement",
        "zoom",
        "sound",
        "dialogue",
        "stunt_instructions",
        "style",
        "transition",
        mode="before",
    )
    @classmethod
    def _text(cls, v: object) -> str:
        return text_or_empty(v)


class Scene(CastGraphBaseModel):
    """Ordered unit of narrative within a project."""

    id: str | None = None
    sequence_number: int = Field(..., description="Canonical ordering within the project")
    raw_idea: str = ""
    enhanced_prompt: str = Field("", description="Director-refined prompt")
    context_summary: str = Field("", description="What happened in this scene")
    director_settings: DirectorSettings = Field(default_factory=DirectorSettings)

    @field_validator("raw_idea", "enhanced_prompt", "context_summary", mode="before")
    @classmethod
    def _text(cls, v: object) -> str:
        return text_or_empty(v)

    @field_validator("director_settings", mode="before")
    @classmethod
    def _settings(cls, v: object) -> object:
        return DirectorSettings() if v is None else v

    def searchable_text(self) -> str:
        """Return the lower-cased text consulted for character mentions."""
        parts = (
            self.director_settings.dialogue,
            self.enhanced_prompt,
            self.context_summary,
            self.raw_idea,
        )
        return " ".join(parts).lower()


__all__ = ["DirectorSettings", "Scene"]
