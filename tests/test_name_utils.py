from castgraph.core.name_utils import (
    bulk_normalize,
    canonical_pair,
    mentions,
    name_key,
    normalize_name,
    pair_key,
)


def test_normalize_name_collapses_whitespace():
    assert normalize_name("  Mary   Jane ") == "Mary Jane"


def test_name_key_is_case_insensitive():
    assert name_key("ANA") == name_key("ana")


def test_canonical_pair_is_order_independent():
    assert canonical_pair("Ben", "Ana") == ("Ana", "Ben")
    assert canonical_pair("Ana", "Ben") == ("Ana", "Ben")


def test_pair_key_ignores_case_and_order():
    assert pair_key("Ben", "ana") == pair_key("ANA", "ben") == ("ana", "ben")


def test_mentions_requires_whole_word():
    assert mentions("Al", "al waits by the door")
    assert not mentions("Al", "alignment chart")
    assert not mentions("Al", "")


def test_mentions_multi_word_name_across_whitespace():
    assert mentions("Mary Jane", "then mary\njane left")


def test_bulk_normalize_dedupes_preserving_first_spelling():
    assert bulk_normalize(["Ana", "ana ", "Ben", ""]) == ["Ana", "Ben"]
