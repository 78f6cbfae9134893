# src/castgraph/analysis/extractor.py
"""Keyword-based character relationship extraction.

The extractor is a pure function of the roster and the scenes: no I/O, no
randomness.  It runs in three passes:

1. build the candidate set (roster plus names mined from scene text);
2. count, per unordered pair, the scenes in which both names occur as whole
   words;
3. normalize counts against the busiest pair of the batch and classify each
   pair from ally/enemy keyword counts in the scenes they share.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from castgraph.core.logging import get_logger, log_calls
from castgraph.core.name_utils import canonical_pair, mentions, name_key
from castgraph.models import Character, Relationship, RelationshipType, Scene

from .candidates import candidate_names
from .keywords import ALLY_KEYWORDS, ALLY_STRENGTH_THRESHOLD, ENEMY_KEYWORDS

logger = get_logger(__name__)


@dataclass
class PairTally:
    """Co-occurrence bookkeeping for one canonical pair."""

    character1: str
    character2: str
    count: int = 0
    scenes: list[int] = field(default_factory=list)

    def record(self, sequence_number: int) -> None:
        self.count += 1
        if sequence_number not in self.scenes:
            self.scenes.append(sequence_number)


@dataclass(frozen=True)
class KeywordScore:
    """Ally and enemy keyword hits for one pair."""

    ally: int = 0
    enemy: int = 0


def mentioned_in(candidates: Iterable[str], text: str) -> list[str]:
    """Return the candidates that occur in ``text`` as whole words."""
    return [name for name in candidates if mentions(name, text)]


def count_cooccurrences(
    candidates: Sequence[str], scenes: Sequence[Scene]
) -> dict[tuple[str, str], PairTally]:
    """Tally, per canonical pair, the scenes in which both names are mentioned."""
    tallies: dict[tuple[str, str], PairTally] = {}
    for scene in sorted(scenes, key=lambda s: s.sequence_number):
        present = mentioned_in(candidates, scene.searchable_text())
        for first, second in itertools.combinations(present, 2):
            if name_key(first) == name_key(second):
                continue
            pair = canonical_pair(first, second)
            tally = tallies.get(pair)
            if tally is None:
                tally = tallies[pair] = PairTally(*pair)
            tally.record(scene.sequence_number)
    return tallies


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Count substring occurrences of every keyword in lower-cased ``text``."""
    return sum(text.count(keyword) for keyword in keywords)


def score_pair(tally: PairTally, scenes: Sequence[Scene]) -> KeywordScore:
    """Score ally/enemy signals over the scenes the pair shares.

    A scene only contributes when both names are present in its text.
    """
    shared = set(tally.scenes)
    ally = enemy = 0
    for scene in scenes:
        if scene.sequence_number not in shared:
            continue
        text = scene.searchable_text()
        if not (mentions(tally.character1, text) and mentions(tally.character2, text)):
            continue
        ally += count_keywords(text, ALLY_KEYWORDS)
        enemy += count_keywords(text, ENEMY_KEYWORDS)
    return KeywordScore(ally=ally, enemy=enemy)


def classify(score: KeywordScore, strength: float) -> RelationshipType:
    """Apply the keyword decision rule to a scored pair."""
    if score.enemy > score.ally and score.enemy > 0:
        return RelationshipType.ENEMIES
    if score.ally > score.enemy and score.ally > 0:
        return RelationshipType.ALLIES
    if strength > ALLY_STRENGTH_THRESHOLD and score.ally >= score.enemy:
        return RelationshipType.ALLIES
    return RelationshipType.NEUTRAL


@log_calls
def extract_relationships(
    characters: Sequence[Character], scenes: Sequence[Scene]
) -> list[Relationship]:
    """Infer relationships between characters from scene text alone.

    Returns one relationship per pair with at least one shared scene, ordered
    by descending strength and then by pair.  An empty candidate set yields an
    empty list.
    """
    candidates = candidate_names(characters, scenes)
    if not candidates:
        logger.debug("No candidate characters; skipping keyword extraction")
        return []

    tallies = count_cooccurrences(candidates, scenes)
    max_count = max((t.count for t in tallies.values()), default=0) or 1

    relationships: list[Relationship] = []
    for tally in tallies.values():
        strength = tally.count / max_count
        score = score_pair(tally, scenes)
        relationships.append(
            Relationship(
                character1=tally.character1,
                character2=tally.character2,
                strength=strength,
                scenes=tally.scenes,
                type=classify(score, strength),
            )
        )

    relationships.sort(key=lambda r: (-r.strength, r.pair_key))
    logger.info(
        "Keyword extraction found %d relationships among %d candidates across %d scenes",
        len(relationships),
        len(candidates),
        len(scenes),
    )
    return relationships


__all__ = [
    "PairTally",
    "KeywordScore",
    "mentioned_in",
    "count_cooccurrences",
    "count_keywords",
    "score_pair",
    "classify",
    "extract_relationships",
]
