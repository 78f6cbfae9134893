import pytest

from castgraph.analysis.extractor import (
    KeywordScore,
    classify,
    count_cooccurrences,
    count_keywords,
    extract_relationships,
)
from castgraph.models import Character, RelationshipType, Scene


def _scenes(*texts):
    return [Scene(sequence_number=i, raw_idea=t) for i, t in enumerate(texts, start=1)]


def test_end_to_end_comrades_turned_foes(roster, duel_scenes):
    relationships = extract_relationships(roster, duel_scenes)

    assert len(relationships) == 1
    rel = relationships[0]
    assert (rel.character1, rel.character2) == ("Ana", "Ben")
    assert rel.scenes == [1, 2]
    assert rel.strength == 1.0
    # ally: trust, side by side; enemy: fought, against, attack, threat
    assert rel.type is RelationshipType.ENEMIES
    assert rel.description is None


def test_empty_candidate_set_yields_nothing():
    assert extract_relationships([], []) == []
    assert extract_relationships([], _scenes("the rain falls")) == []


def test_strength_is_normalized_to_busiest_pair():
    roster = [Character(name=n) for n in ("Ana", "Ben", "Cal")]
    scenes = _scenes("Ana, Ben and Cal walk to the market.", "Ana and Ben walk home.")

    relationships = extract_relationships(roster, scenes)

    assert [r.pair_key for r in relationships] == [
        ("ana", "ben"),
        ("ana", "cal"),
        ("ben", "cal"),
    ]
    assert max(r.strength for r in relationships) == 1.0
    assert [r.strength for r in relationships] == [1.0, 0.5, 0.5]
    # frequent pair without conflict defaults to allies, the rest stay neutral
    assert [r.type for r in relationships] == [
        RelationshipType.ALLIES,
        RelationshipType.NEUTRAL,
        RelationshipType.NEUTRAL,
    ]


def test_pair_identity_is_independent_of_mention_order(roster):
    forward = extract_relationships(roster, _scenes("Ana met Ben."))
    backward = extract_relationships(roster, _scenes("Ben met Ana."))
    assert [r.pair_key for r in forward] == [r.pair_key for r in backward]
    assert (forward[0].character1, forward[0].character2) == ("Ana", "Ben")


def test_no_self_pairs_from_repeated_or_recased_names():
    roster = [Character(name="Ana"), Character(name="Ben")]
    scenes = _scenes('ANA: "Ana?" Ana answered Ben.')
    relationships = extract_relationships(roster, scenes)
    assert all(r.pair_key[0] != r.pair_key[1] for r in relationships)
    assert len(relationships) == 1


def test_names_match_whole_words_only():
    roster = [Character(name="Al"), Character(name="Ben")]
    assert extract_relationships(roster, _scenes("Ben studies the Alignment chart.")) == []
    assert len(extract_relationships(roster, _scenes("Ben and Al study the chart."))) == 1


def test_repeated_scene_is_counted_once_per_scene(roster):
    tallies = count_cooccurrences(["Ana", "Ben"], _scenes("Ana, Ben, Ana and Ben again."))
    tally = tallies[("Ana", "Ben")]
    assert tally.count == 1
    assert tally.scenes == [1]


def test_extraction_is_deterministic(roster, duel_scenes):
    first = extract_relationships(roster, duel_scenes)
    second = extract_relationships(roster, list(reversed(duel_scenes)))
    assert first == second


def test_mined_names_join_the_graph():
    scenes = _scenes('Mira: "Stay close, Ana." Ana nods.')
    relationships = extract_relationships([Character(name="Ana")], scenes)
    assert [r.pair_key for r in relationships] == [("ana", "mira")]


def test_keywords_count_as_substrings():
    assert count_keywords("they attacked and attacked", ("attack",)) == 2
    assert count_keywords("", ("attack",)) == 0


@pytest.mark.parametrize(
    ("score", "strength", "expected"),
    [
        (KeywordScore(ally=0, enemy=1), 0.1, RelationshipType.ENEMIES),
        (KeywordScore(ally=2, enemy=1), 0.1, RelationshipType.ALLIES),
        (KeywordScore(ally=0, enemy=0), 0.8, RelationshipType.ALLIES),
        (KeywordScore(ally=1, enemy=1), 0.8, RelationshipType.ALLIES),
        (KeywordScore(ally=1, enemy=1), 0.5, RelationshipType.NEUTRAL),
        (KeywordScore(ally=0, enemy=0), 0.7, RelationshipType.NEUTRAL),
    ],
)
def test_decision_rule(score, strength, expected):
    assert classify(score, strength) is expected
