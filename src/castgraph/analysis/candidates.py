# src/castgraph/analysis/candidates.py
"""Candidate character discovery.

The trusted roster is always used as-is.  Scene text is additionally mined
for names that the roster may be missing, using speaker tags
(``Name: "..."``) and narrative attribution (``Name whispered``,
``Name's eyes``, ``the villain Name``).  Mined names are filtered against the
technical vocabulary and stopword tables before they are accepted.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from castgraph.core.logging import get_logger
from castgraph.core.name_utils import bulk_normalize, name_key, normalize_name
from castgraph.models import Character, Scene

from .keywords import (
    BODY_NOUNS,
    MAX_NAME_LENGTH,
    MAX_NAME_WORDS,
    MIN_NAME_LENGTH,
    REPORTING_VERBS,
    ROLE_NOUNS,
    is_denied_word,
)

logger = get_logger(__name__)

_CAP_WORD = r"[A-Z][A-Za-z'\-]*"

# Speaker tag: one or two capitalized words, a colon, then an opening quote.
DIALOGUE_ATTRIBUTION = re.compile(
    rf"(?<![\w'])({_CAP_WORD}(?:[ \t]+{_CAP_WORD})?)[ \t]*:[ \t]*[\"'“‘]"
)
REPORTING_ATTRIBUTION = re.compile(
    rf"(?<![\w'])([A-Z][a-z]+)\s+(?:{'|'.join(REPORTING_VERBS)})\b"
)
POSSESSIVE_ATTRIBUTION = re.compile(
    rf"(?<![\w'])([A-Z][a-z]+)['’]s\s+(?:{'|'.join(BODY_NOUNS)})\b"
)
ROLE_ATTRIBUTION = re.compile(
    rf"\b(?i:{'|'.join(ROLE_NOUNS)})\s+([A-Z][a-z]+)\b"
)

NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    DIALOGUE_ATTRIBUTION,
    REPORTING_ATTRIBUTION,
    POSSESSIVE_ATTRIBUTION,
    ROLE_ATTRIBUTION,
)


def is_plausible_name(name: str) -> bool:
    """Return ``True`` if a mined ``name`` passes the vocabulary and size filters."""
    name = normalize_name(name)
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        return False
    words = name.split(" ")
    if len(words) > MAX_NAME_WORDS:
        return False
    return not any(is_denied_word(word) for word in words)


def mine_names(text: str) -> list[str]:
    """Return plausible character names found in ``text``, in order of appearance."""
    found: list[tuple[int, str]] = []
    for pattern in NAME_PATTERNS:
        for match in pattern.finditer(text):
            found.append((match.start(1), match.group(1)))
    found.sort()
    accepted: list[str] = []
    for _, name in found:
        if is_plausible_name(name):
            accepted.append(name)
            continue
        # "Then Mira:" - the speaker is the last capitalized word.
        last = normalize_name(name).split(" ")[-1]
        if last != normalize_name(name) and is_plausible_name(last):
            accepted.append(last)
    return bulk_normalize(accepted)


def scene_names(scene: Scene) -> list[str]:
    """Mine candidate names from every text field of ``scene``."""
    names: list[str] = []
    for text in (
        scene.director_settings.dialogue,
        scene.enhanced_prompt,
        scene.context_summary,
        scene.raw_idea,
    ):
        if text:
            names.extend(mine_names(text))
    return bulk_normalize(names)


def candidate_names(characters: Iterable[Character], scenes: Iterable[Scene]) -> list[str]:
    """Return the union of roster names and names mined from ``scenes``.

    Roster names keep their spelling and are never filtered; a mined name that
    matches a roster name case-insensitively collapses onto the roster entry.
    """
    roster = bulk_normalize(character.name for character in characters)
    known = {name_key(name) for name in roster}
    mined: list[str] = []
    for scene in scenes:
        for name in scene_names(scene):
            if name_key(name) not in known:
                known.add(name_key(name))
                mined.append(name)
    if mined:
        logger.debug("Mined %d names outside the roster: %s", len(mined), mined)
    return roster + mined


__all__ = [
    "DIALOGUE_ATTRIBUTION",
    "REPORTING_ATTRIBUTION",
    "POSSESSIVE_ATTRIBUTION",
    "ROLE_ATTRIBUTION",
    "NAME_PATTERNS",
    "is_plausible_name",
    "mine_names",
    "scene_names",
    "candidate_names",
]
