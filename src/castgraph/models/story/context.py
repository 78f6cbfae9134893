# src/castgraph/models/story/context.py
"""Project-level story context passed to the AI suggester."""

from __future__ import annotations

from pydantic import Field

from ..base_model import CastGraphBaseModel


class StoryContext(CastGraphBaseModel):
    """Title, genre and summary of the project being analyzed."""

    id: str | None = None
    title: str = ""
    genre: str = ""
    plot_summary: str = ""
    characters: str = Field("", description="Free-text cast notes")
    initial_context: str | None = None
    content_type: str | None = None


__all__ = ["StoryContext"]
