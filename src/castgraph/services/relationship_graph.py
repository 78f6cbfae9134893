# src/castgraph/services/relationship_graph.py
"""Relationship graph service.

Ties extraction to persistence: a project's relationships are computed once,
stored with the method that produced them, and served from the store until
the caller asks for a re-analysis or clears them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from castgraph.analysis import (
    ExtractionOutcome,
    RelationshipSuggester,
    extract_relationships,
    extract_via_ai,
)
from castgraph.canon.crud import RelationshipStore
from castgraph.core.logging import get_logger
from castgraph.models import (
    AnalysisMethod,
    Character,
    Relationship,
    RelationshipBatch,
    Scene,
    StoryContext,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """A persisted batch plus how it was obtained."""

    batch: RelationshipBatch
    warning: str | None = None
    reused: bool = False


class RelationshipGraphService:
    """Compute, persist and serve relationship graphs per project."""

    def __init__(
        self,
        store: RelationshipStore,
        analyst: RelationshipSuggester | None = None,
    ) -> None:
        self.store = store
        self._analyst = analyst

    def _suggester(self) -> RelationshipSuggester:
        if self._analyst is None:
            from castgraph.agents import RelationshipAnalyst

            self._analyst = RelationshipAnalyst()
        return self._analyst

    async def extract(
        self,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None = None,
        use_ai: bool = False,
    ) -> ExtractionOutcome:
        """Run the requested extractor without touching the store."""
        if not use_ai:
            return ExtractionOutcome(
                relationships=extract_relationships(characters, scenes),
                method=AnalysisMethod.KEYWORD,
            )
        try:
            suggester = self._suggester()
        except ValueError as exc:
            logger.warning("No AI analyst available: %s", exc)
            return ExtractionOutcome(
                relationships=extract_relationships(characters, scenes),
                method=AnalysisMethod.KEYWORD,
                warning="AI analysis unavailable (no model configured); keyword analysis was used instead.",
            )
        return await extract_via_ai(characters, scenes, story_context, suggester)

    async def get_or_analyze(
        self,
        project_id: str,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None = None,
        use_ai: bool = False,
    ) -> AnalysisResult:
        """Return the stored analysis of ``project_id``, computing it if absent."""
        existing = await self.store.load(project_id)
        if existing is not None:
            logger.debug("Reusing stored analysis for project %s", project_id)
            return AnalysisResult(batch=existing, reused=True)
        return await self._analyze_and_save(
            project_id, characters, scenes, story_context, use_ai
        )

    async def reanalyze(
        self,
        project_id: str,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None = None,
        use_ai: bool = False,
    ) -> AnalysisResult:
        """Discard the stored analysis of ``project_id`` and compute a fresh one."""
        removed = await self.store.clear(project_id)
        logger.info(
            "Re-analyzing project %s (discarded %d relationships)", project_id, removed
        )
        return await self._analyze_and_save(
            project_id, characters, scenes, story_context, use_ai
        )

    async def save_external(
        self,
        project_id: str,
        relationships: Sequence[Relationship],
        method: AnalysisMethod,
    ) -> RelationshipBatch:
        """Persist a caller-supplied relationship set as the project's analysis."""
        return await self.store.save(project_id, relationships, method)

    async def clear(self, project_id: str) -> int:
        """Forget the analysis of ``project_id``."""
        return await self.store.clear(project_id)

    async def _analyze_and_save(
        self,
        project_id: str,
        characters: Sequence[Character],
        scenes: Sequence[Scene],
        story_context: StoryContext | None,
        use_ai: bool,
    ) -> AnalysisResult:
        outcome = await self.extract(characters, scenes, story_context, use_ai)
        batch = await self.store.save(project_id, outcome.relationships, outcome.method)
        return AnalysisResult(batch=batch, warning=outcome.warning)


__all__ = ["AnalysisResult", "RelationshipGraphService"]
