# src/castgraph/analysis/ai.py
"""AI-delegated relationship extraction with keyword fallback.

The AI suggester decides which pairs are related and how; this module only
validates its answer, re-derives the scene lists from the text, and falls
back to the keyword extractor whenever the suggester cannot be used.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import ValidationError

from castgraph.core.errors import SuggesterError
from castgraph.core.logging import get_logger
from castgraph.core.name_utils import mentions, name_key
from castgraph.models import (
    AnalysisMethod,
    Character,
    Relationship,
    RelationshipSuggestion,
    Scene,
    StoryContext,
)

from .extractor import extract_relationships

logger = get_logger(__name__)

# Scene reported for an AI pair that never co-occurs in the text.
FALLBACK_SCENES: tuple[int, ...] = (1,)


class RelationshipSuggester(Protocol):
    """Async callable returning relationship suggestions for a project."""

    async def __call__(
        self,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None,
    ) -> Sequence[RelationshipSuggestion | Mapping[str, Any]]: ...


@dataclass(frozen=True)
class ExtractionOutcome:
    """Relationships produced by one extraction run and the method that produced them."""

    relationships: list[Relationship]
    method: AnalysisMethod
    warning: str | None = None


def coerce_suggestions(raw: Any) -> list[RelationshipSuggestion]:
    """Validate a raw suggester payload.

    Entries naming the same character twice or leaving a name blank are
    dropped; anything else that does not fit the suggestion shape raises
    :class:`SuggesterError`.
    """
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        raise SuggesterError(
            f"expected a list of relationships, got {type(raw).__name__}"
        )

    suggestions: list[RelationshipSuggestion] = []
    for index, item in enumerate(raw):
        if isinstance(item, RelationshipSuggestion):
            suggestion = item
        elif isinstance(item, Mapping):
            first = str(item.get("character1") or "").strip()
            second = str(item.get("character2") or "").strip()
            if not first or not second:
                logger.debug("Dropping suggestion %d with a blank name", index)
                continue
            try:
                suggestion = RelationshipSuggestion.model_validate(dict(item))
            except ValidationError as exc:
                raise SuggesterError(f"invalid suggestion at index {index}: {exc}") from exc
        else:
            raise SuggesterError(
                f"invalid suggestion at index {index}: {type(item).__name__}"
            )
        if name_key(suggestion.character1) == name_key(suggestion.character2):
            logger.debug("Dropping self-pair suggestion for %s", suggestion.character1)
            continue
        suggestions.append(suggestion)
    return suggestions


def shared_scenes(first: str, second: str, scenes: Sequence[Scene]) -> list[int]:
    """Return sequence numbers of scenes that mention both names as whole words."""
    found: list[int] = []
    for scene in scenes:
        text = scene.searchable_text()
        if mentions(first, text) and mentions(second, text):
            found.append(scene.sequence_number)
    return sorted(set(found))


def relationships_from_suggestions(
    suggestions: Sequence[RelationshipSuggestion],
    characters: Sequence[Character],
    scenes: Sequence[Scene],
) -> list[Relationship]:
    """Turn validated suggestions into relationships with text-derived scene lists.

    Names matching a roster entry take the roster spelling.  Later suggestions
    for an already-seen pair are ignored.
    """
    roster = {name_key(c.name): c.name for c in characters}
    relationships: list[Relationship] = []
    seen: set[tuple[str, str]] = set()
    for suggestion in suggestions:
        first = roster.get(name_key(suggestion.character1), suggestion.character1)
        second = roster.get(name_key(suggestion.character2), suggestion.character2)
        rel = Relationship(
            character1=first,
            character2=second,
            strength=suggestion.strength,
            scenes=shared_scenes(first, second, scenes) or list(FALLBACK_SCENES),
            type=suggestion.type,
            description=suggestion.description,
        )
        if rel.pair_key in seen:
            logger.debug("Ignoring repeated suggestion for %s", rel.pair_key)
            continue
        seen.add(rel.pair_key)
        relationships.append(rel)
    return relationships


async def extract_via_ai(
    characters: Sequence[Character],
    scenes: Sequence[Scene],
    story_context: StoryContext | None,
    suggester: RelationshipSuggester,
) -> ExtractionOutcome:
    """Extract relationships through ``suggester``, falling back to keywords on failure.

    Suggester failures never propagate: the keyword result is returned with
    ``method`` set to keyword and a human-readable ``warning``.
    """
    try:
        raw = await suggester(characters, scenes, story_context)
        suggestions = coerce_suggestions(raw)
        relationships = relationships_from_suggestions(suggestions, characters, scenes)
    except Exception as exc:
        logger.warning(
            "AI relationship analysis failed (%s: %s); using keyword analysis",
            type(exc).__name__,
            exc,
        )
        return ExtractionOutcome(
            relationships=extract_relationships(characters, scenes),
            method=AnalysisMethod.KEYWORD,
            warning=f"AI analysis unavailable ({type(exc).__name__}); keyword analysis was used instead.",
        )

    logger.info("AI extraction produced %d relationships", len(relationships))
    return ExtractionOutcome(relationships=relationships, method=AnalysisMethod.AI)


__all__ = [
    "FALLBACK_SCENES",
    "RelationshipSuggester",
    "ExtractionOutcome",
    "coerce_suggestions",
    "shared_scenes",
    "relationships_from_suggestions",
    "extract_via_ai",
]
