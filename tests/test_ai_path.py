from unittest.mock import AsyncMock

import pytest

from castgraph.analysis.ai import coerce_suggestions, extract_via_ai
from castgraph.analysis.extractor import extract_relationships
from castgraph.core.errors import SuggesterError
from castgraph.models import AnalysisMethod, RelationshipSuggestion, RelationshipType, Scene, StoryContext


async def test_suggestions_become_relationships_with_rescanned_scenes(roster, duel_scenes):
    suggester = AsyncMock(
        return_value=[
            {
                "character1": "ben",
                "character2": "Ana",
                "strength": 0.9,
                "type": "romantic",
                "description": "Former lovers",
            }
        ]
    )
    context = StoryContext(title="Ashes")

    outcome = await extract_via_ai(roster, duel_scenes, context, suggester)

    suggester.assert_awaited_once_with(roster, duel_scenes, context)
    assert outcome.method is AnalysisMethod.AI
    assert outcome.warning is None
    (rel,) = outcome.relationships
    assert (rel.character1, rel.character2) == ("Ana", "Ben")
    assert rel.scenes == [1, 2]
    assert rel.strength == 0.9
    assert rel.type is RelationshipType.ROMANTIC
    assert rel.description == "Former lovers"


async def test_pair_without_shared_scene_falls_back_to_first_scene(roster):
    scenes = [Scene(sequence_number=3, raw_idea="Ana alone."), Scene(sequence_number=4, raw_idea="Ben alone.")]
    suggester = AsyncMock(
        return_value=[RelationshipSuggestion(character1="Ana", character2="Ben", type="family")]
    )
    outcome = await extract_via_ai(roster, scenes, None, suggester)
    assert outcome.relationships[0].scenes == [1]


async def test_suggester_failure_falls_back_to_keyword_result(roster, duel_scenes):
    suggester = AsyncMock(side_effect=ConnectionError("proxy down"))

    outcome = await extract_via_ai(roster, duel_scenes, None, suggester)

    assert outcome.method is AnalysisMethod.KEYWORD
    assert outcome.relationships == extract_relationships(roster, duel_scenes)
    assert outcome.warning and "ConnectionError" in outcome.warning


async def test_malformed_payload_falls_back(roster, duel_scenes):
    suggester = AsyncMock(return_value={"error": "rate limited"})
    outcome = await extract_via_ai(roster, duel_scenes, None, suggester)
    assert outcome.method is AnalysisMethod.KEYWORD
    assert "SuggesterError" in outcome.warning


async def test_duplicate_suggestions_keep_the_first(roster, duel_scenes):
    suggester = AsyncMock(
        return_value=[
            {"character1": "Ana", "character2": "Ben", "type": "allies"},
            {"character1": "Ben", "character2": "Ana", "type": "enemies"},
        ]
    )
    outcome = await extract_via_ai(roster, duel_scenes, None, suggester)
    assert [r.type for r in outcome.relationships] == [RelationshipType.ALLIES]


def test_coerce_drops_blank_names_and_self_pairs():
    suggestions = coerce_suggestions(
        [
            {"character1": "", "character2": "Ben"},
            {"character1": "Ana", "character2": "ANA"},
            {"character1": "Ana", "character2": "Ben", "strength": 2},
        ]
    )
    assert len(suggestions) == 1
    assert suggestions[0].strength == 1.0


@pytest.mark.parametrize("payload", ["not json", None, {"a": 1}, [42]])
def test_coerce_rejects_malformed_payloads(payload):
    with pytest.raises(SuggesterError):
        coerce_suggestions(payload)
