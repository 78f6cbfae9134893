# src/castgraph/canon/crud.py
"""Create/read/delete operations for persisted relationship analyses.

The ``*_conn`` functions run on a caller-supplied session and never commit;
:class:`RelationshipStore` wraps them in transactions.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from castgraph.core.errors import DuplicateRelationshipError, RelationshipSaveError
from castgraph.core.logging import get_logger, log_calls
from castgraph.models import (
    AnalysisMethod,
    CharacterRelationshipSQL,
    Relationship,
    RelationshipAnalysisSQL,
    RelationshipBatch,
    RelationshipType,
)

from .db import SessionLocal

logger = get_logger(__name__)


def _sort_key(rel: Relationship) -> tuple[float, tuple[str, str]]:
    return (-rel.strength, rel.pair_key)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive timestamps.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _to_row(project_id: str, rel: Relationship) -> CharacterRelationshipSQL:
    return CharacterRelationshipSQL(
        project_id=project_id,
        character1=rel.character1,
        character2=rel.character2,
        strength=rel.strength,
        scenes=list(rel.scenes),
        relationship_type=rel.type.value,
        description=rel.description,
    )


def _from_row(row: CharacterRelationshipSQL) -> Relationship:
    return Relationship(
        character1=row.character1,
        character2=row.character2,
        strength=row.strength,
        scenes=list(row.scenes or []),
        type=RelationshipType(row.relationship_type),
        description=row.description,
    )


def check_unique_pairs(project_id: str, relationships: Sequence[Relationship]) -> None:
    """Raise :class:`DuplicateRelationshipError` if a pair appears twice."""
    seen: set[tuple[str, str]] = set()
    for rel in relationships:
        if rel.pair_key in seen:
            raise DuplicateRelationshipError(project_id, (rel.character1, rel.character2))
        seen.add(rel.pair_key)


async def get_analysis_conn(
    session: AsyncSession, project_id: str
) -> RelationshipAnalysisSQL | None:
    """Return the analysis record of ``project_id`` if one exists."""
    return await session.get(RelationshipAnalysisSQL, project_id)


async def get_relationships_conn(
    session: AsyncSession, project_id: str
) -> list[Relationship]:
    """Return the stored relationships of ``project_id``, strongest first."""
    result = await session.execute(
        select(CharacterRelationshipSQL).where(
            CharacterRelationshipSQL.project_id == project_id
        )
    )
    return sorted((_from_row(row) for row in result.scalars()), key=_sort_key)


async def delete_relationships_conn(session: AsyncSession, project_id: str) -> int:
    """Delete every relationship and the analysis record of ``project_id``.

    Returns the number of relationships removed.
    """
    result = await session.execute(
        delete(CharacterRelationshipSQL).where(
            CharacterRelationshipSQL.project_id == project_id
        )
    )
    await session.execute(
        delete(RelationshipAnalysisSQL).where(
            RelationshipAnalysisSQL.project_id == project_id
        )
    )
    return int(result.rowcount or 0)


async def insert_relationships_conn(
    session: AsyncSession, project_id: str, relationships: Sequence[Relationship]
) -> None:
    """Insert ``relationships`` for ``project_id``."""
    session.add_all([_to_row(project_id, rel) for rel in relationships])
    await session.flush()


async def record_analysis_conn(session: AsyncSession, batch: RelationshipBatch) -> None:
    """Insert or replace the analysis record described by ``batch``."""
    await session.merge(
        RelationshipAnalysisSQL(
            project_id=batch.project_id,
            analysis_method=batch.analysis_method.value,
            relationship_count=len(batch.relationships),
            analyzed_at=batch.analyzed_at,
        )
    )
    await session.flush()


class RelationshipStore:
    """Transactional persistence of per-project relationship sets.

    A project is either unanalyzed (``load`` returns ``None``) or holds
    exactly the set written by its last successful :meth:`save`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory or SessionLocal

    @log_calls
    async def load(self, project_id: str) -> RelationshipBatch | None:
        """Return the persisted batch of ``project_id`` or ``None`` if never analyzed."""
        async with self._session_factory() as session:
            analysis = await get_analysis_conn(session, project_id)
            if analysis is None:
                return None
            relationships = await get_relationships_conn(session, project_id)
        return RelationshipBatch(
            project_id=project_id,
            relationships=relationships,
            analysis_method=AnalysisMethod(analysis.analysis_method),
            analyzed_at=_as_utc(analysis.analyzed_at),
        )

    @log_calls
    async def save(
        self,
        project_id: str,
        relationships: Sequence[Relationship],
        method: AnalysisMethod,
    ) -> RelationshipBatch:
        """Replace the relationship set of ``project_id`` atomically.

        Raises
        ------
        DuplicateRelationshipError
            If ``relationships`` names a pair more than once. Nothing is written.
        RelationshipSaveError
            If the database write fails. The previous set is left intact.
        """
        check_unique_pairs(project_id, relationships)
        batch = RelationshipBatch(
            project_id=project_id,
            relationships=sorted(relationships, key=_sort_key),
            analysis_method=method,
        )
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    removed = await delete_relationships_conn(session, project_id)
                    await insert_relationships_conn(session, project_id, batch.relationships)
                    await record_analysis_conn(session, batch)
            except SQLAlchemyError as exc:
                logger.error(
                    "Saving relationships for project %s failed; rolled back: %s",
                    project_id,
                    exc,
                )
                raise RelationshipSaveError(project_id, str(exc)) from exc

        logger.info(
            "Saved %d relationships for project %s via %s (replaced %d)",
            len(batch.relationships),
            project_id,
            method.value,
            removed,
        )
        return batch

    @log_calls
    async def clear(self, project_id: str) -> int:
        """Forget the analysis of ``project_id``; returns relationships removed."""
        async with self._session_factory() as session:
            async with session.begin():
                removed = await delete_relationships_conn(session, project_id)
        logger.info("Cleared %d relationships for project %s", removed, project_id)
        return removed


__all__ = [
    "RelationshipStore",
    "check_unique_pairs",
    "get_analysis_conn",
    "get_relationships_conn",
    "delete_relationships_conn",
    "insert_relationships_conn",
    "record_analysis_conn",
]
