# src/castgraph/analysis/graph.py
"""Read-side helpers over a relationship set."""

from __future__ import annotations

from collections.abc import Iterable

from castgraph.core.name_utils import bulk_normalize
from castgraph.models import Relationship, RelationshipType


def filter_relationships(
    relationships: Iterable[Relationship],
    type: RelationshipType | None = None,
    character: str | None = None,
) -> list[Relationship]:
    """Return relationships matching ``type`` and involving ``character``.

    Either filter may be omitted.
    """
    return [
        rel
        for rel in relationships
        if (type is None or rel.type is type)
        and (not character or rel.involves(character))
    ]


def relationships_for(
    relationships: Iterable[Relationship], character: str
) -> list[Relationship]:
    """Return the relationships of ``character``, strongest first."""
    found = filter_relationships(relationships, character=character)
    return sorted(found, key=lambda r: (-r.strength, r.other(character).casefold()))


def characters_in(relationships: Iterable[Relationship]) -> list[str]:
    """Return every character that appears in at least one relationship."""
    names: list[str] = []
    for rel in relationships:
        names.extend((rel.character1, rel.character2))
    return sorted(bulk_normalize(names), key=str.casefold)


__all__ = ["filter_relationships", "relationships_for", "characters_in"]
