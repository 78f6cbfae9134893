import pytest
from pydantic import ValidationError

from castgraph.models import (
    AnalysisMethod,
    Relationship,
    RelationshipBatch,
    RelationshipSuggestion,
    RelationshipType,
    Scene,
)


def test_relationship_canonicalizes_pair():
    rel = Relationship(character1="Ben", character2="Ana", strength=0.4)
    assert (rel.character1, rel.character2) == ("Ana", "Ben")


def test_relationship_rejects_self_pair():
    with pytest.raises(ValidationError):
        Relationship(character1="Ana", character2="ana")


def test_relationship_scenes_are_sorted_and_deduplicated():
    rel = Relationship(character1="Ana", character2="Ben", scenes=[3, 1, 3])
    assert rel.scenes == [1, 3]


def test_relationship_strength_bounds():
    with pytest.raises(ValidationError):
        Relationship(character1="Ana", character2="Ben", strength=1.5)


def test_batch_rejects_duplicate_pairs():
    with pytest.raises(ValidationError):
        RelationshipBatch(
            project_id="p1",
            relationships=[
                Relationship(character1="Ana", character2="Ben"),
                Relationship(character1="ben", character2="ANA"),
            ],
        )


def test_batch_accepts_camel_case_method():
    batch = RelationshipBatch.model_validate({"projectId": "p1", "analysisMethod": "AI"})
    assert batch.analysis_method is AnalysisMethod.AI


def test_suggestion_is_forgiving():
    s = RelationshipSuggestion.model_validate(
        {"character1": " Ana ", "character2": "Ben", "strength": "7", "type": "Enemy"}
    )
    assert s.character1 == "Ana"
    assert s.strength == 1.0
    assert s.type is RelationshipType.ENEMIES
    unknown = RelationshipSuggestion(character1="Ana", character2="Ben", type="frenemies")
    assert unknown.type is RelationshipType.NEUTRAL


def test_scene_missing_fields_are_empty():
    scene = Scene.model_validate(
        {"sequenceNumber": 4, "rawIdea": None, "directorSettings": {"dialogue": None}}
    )
    assert scene.searchable_text() == "   "
    assert scene.director_settings.dialogue == ""


def test_scene_searchable_text_order_and_case():
    scene = Scene(
        sequence_number=1,
        raw_idea="Idea",
        enhanced_prompt="Prompt",
        context_summary="Summary",
        director_settings={"dialogue": "Line"},
    )
    assert scene.searchable_text() == "line prompt summary idea"
