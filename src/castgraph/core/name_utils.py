# src/castgraph/core/name_utils.py
"""Name normalization and matching utilities for CastGraph.

Character names are compared case-insensitively everywhere in the core, but
the display spelling supplied by the roster is preserved in output.

Rules:
- normalize_name: NFKC normalize, trim, collapse inner whitespace
- name_key: casefolded normalized name, used for identity and sorting
- canonical_pair: order-independent pair of display names
- mentions: whole-word, case-insensitive presence test
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from functools import lru_cache


def normalize_name(name: str) -> str:
    """Return ``name`` with unicode normalized and whitespace collapsed.

    Examples:
        - "  Ana " -> "Ana"
        - "Mary   Jane" -> "Mary Jane"
    """
    name = unicodedata.normalize("NFKC", str(name))
    return re.sub(r"\s+", " ", name).strip()


def name_key(name: str) -> str:
    """Return the case-insensitive identity of ``name``."""
    return normalize_name(name).casefold()


def canonical_pair(first: str, second: str) -> tuple[str, str]:
    """Return the two names ordered so the pair identity ignores argument order.

    Examples:
        - ("Ben", "Ana") -> ("Ana", "Ben")
        - ("ana", "Ben") -> ("ana", "Ben")
    """
    a, b = normalize_name(first), normalize_name(second)
    if (name_key(b), b) < (name_key(a), a):
        return b, a
    return a, b


def pair_key(first: str, second: str) -> tuple[str, str]:
    """Return the casefolded, order-independent identity of a pair."""
    return tuple(sorted((name_key(first), name_key(second))))  # type: ignore[return-value]


@lru_cache(maxsize=1024)
def name_pattern(name: str) -> re.Pattern[str]:
    """Compile a whole-word, case-insensitive pattern for ``name``.

    Inner whitespace in multi-word names matches any run of whitespace.
    """
    words = [re.escape(part) for part in normalize_name(name).split(" ") if part]
    body = r"\s+".join(words)
    return re.compile(rf"(?<!\w){body}(?!\w)", re.IGNORECASE)


def mentions(name: str, text: str) -> bool:
    """Return ``True`` when ``name`` appears in ``text`` as a whole word.

    Examples:
        - mentions("Al", "Al waits") -> True
        - mentions("Al", "Alignment chart") -> False
    """
    if not name or not text:
        return False
    return name_pattern(normalize_name(name)).search(text) is not None


def bulk_normalize(names: Iterable[str]) -> list[str]:
    """Normalize a sequence of names with case-insensitive dedupe preserving order."""
    out: list[str] = []
    seen: set[str] = set()
    for n in names:
        s = normalize_name(n)
        key = s.casefold()
        if not s or key in seen:
            continue
        seen.add(key)
        out.append(s)
    return out


__all__ = [
    "normalize_name",
    "name_key",
    "canonical_pair",
    "pair_key",
    "name_pattern",
    "mentions",
    "bulk_normalize",
]
