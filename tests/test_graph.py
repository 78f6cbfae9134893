from castgraph.analysis.graph import characters_in, filter_relationships, relationships_for
from castgraph.models import Relationship, RelationshipType


def _graph():
    return [
        Relationship(character1="Ana", character2="Ben", strength=1.0, scenes=[1, 2], type="enemies"),
        Relationship(character1="Ana", character2="Cal", strength=0.5, scenes=[2], type="allies"),
        Relationship(character1="Ben", character2="Dee", strength=0.25, scenes=[3]),
    ]


def test_filter_by_type():
    found = filter_relationships(_graph(), type=RelationshipType.ALLIES)
    assert [r.pair_key for r in found] == [("ana", "cal")]


def test_filter_by_character_is_case_insensitive():
    found = filter_relationships(_graph(), character="ben")
    assert [r.pair_key for r in found] == [("ana", "ben"), ("ben", "dee")]


def test_filters_combine():
    assert filter_relationships(_graph(), type=RelationshipType.NEUTRAL, character="Ana") == []


def test_relationships_for_sorts_strongest_first():
    rels = relationships_for(_graph(), "Ben")
    assert [r.other("Ben") for r in rels] == ["Ana", "Dee"]


def test_characters_in():
    assert characters_in(_graph()) == ["Ana", "Ben", "Cal", "Dee"]
