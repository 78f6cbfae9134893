# src/castgraph/agents/relationship_analyst.py
"""RelationshipAnalyst agent that asks an LLM to classify character relationships."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError

from castgraph.config import config
from castgraph.core.errors import LLMConfigurationError
from castgraph.core.logging import log_calls
from castgraph.models import (
    Character,
    RelationshipSuggestion,
    RelationshipSuggestionList,
    Scene,
    StoryContext,
)

from .base import Agent

# Per-field cap so long projects stay within the model's context window.
MAX_FIELD_CHARS = 600


def _clip(text: str, limit: int = MAX_FIELD_CHARS) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 3] + "..."


def build_prompt(
    characters: Sequence[Character],
    scenes: Sequence[Scene],
    story_context: StoryContext | None,
) -> str:
    """Render the relationship-analysis prompt for ``characters`` and ``scenes``."""
    lines: list[str] = [
        "Analyze the relationships between the characters of this story.",
        "For every pair of characters that interact, return an object with:",
        '  "character1" and "character2": names exactly as listed below,',
        '  "strength": number from 0 to 1 (how strongly they are connected),',
        '  "type": one of "allies", "enemies", "neutral", "romantic", "family",',
        '  "description": one sentence explaining the relationship.',
        "Return a JSON array of these objects and nothing else.",
        "",
    ]
    if story_context is not None:
        lines.append("Story:")
        if story_context.title:
            lines.append(f"  Title: {story_context.title}")
        if story_context.genre:
            lines.append(f"  Genre: {story_context.genre}")
        if story_context.plot_summary:
            lines.append(f"  Plot: {_clip(story_context.plot_summary)}")
        if story_context.characters:
            lines.append(f"  Cast notes: {_clip(story_context.characters)}")
        lines.append("")

    lines.append("Characters:")
    for character in characters:
        detail = "; ".join(
            part for part in (character.role, character.description) if part
        )
        lines.append(f"  - {character.name}" + (f" ({_clip(detail, 200)})" if detail else ""))
    lines.append("")

    lines.append("Scenes:")
    for scene in sorted(scenes, key=lambda s: s.sequence_number):
        parts = [
            f"idea: {_clip(scene.raw_idea)}" if scene.raw_idea else "",
            f"summary: {_clip(scene.context_summary)}" if scene.context_summary else "",
            f"dialogue: {_clip(scene.director_settings.dialogue)}"
            if scene.director_settings.dialogue
            else "",
        ]
        body = " | ".join(part for part in parts if part) or _clip(scene.enhanced_prompt)
        lines.append(f"  Scene {scene.sequence_number}: {body}")

    return "\n".join(lines)


class RelationshipAnalyst(Agent):
    """Agent that proposes typed relationships between a project's characters."""

    non_retryable = (LLMConfigurationError, ValidationError, ValueError)

    def __init__(self, *, model: str | None = None) -> None:
        """Initialize the RelationshipAnalyst agent.

        Parameters
        ----------
        model:
            Optional override for the LLM model. If omitted, the
            ``RELATIONSHIP_ANALYST_MODEL`` environment variable or the
            configured default is used.
        """
        super().__init__(
            model=model,
            default_model_env="RELATIONSHIP_ANALYST_MODEL",
            default_model=config.agents.relationship_analyst,
        )

    @log_calls
    async def suggest(
        self,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None = None,
    ) -> list[RelationshipSuggestion]:
        """Return the LLM's relationship suggestions for the given project data."""
        prompt = build_prompt(characters, scenes, story_context)
        result: RelationshipSuggestionList = await self.with_retries(
            self.call_llm_structured, prompt, RelationshipSuggestionList
        )
        self.logger.info("Received %d relationship suggestions", len(result.root))
        return list(result.root)

    async def __call__(
        self,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None = None,
    ) -> list[RelationshipSuggestion]:
        return await self.suggest(characters, scenes, story_context)


__all__ = ["RelationshipAnalyst", "build_prompt"]
