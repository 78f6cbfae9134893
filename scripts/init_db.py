# scripts/init_db.py
"""Apply Alembic migrations to initialize the relationship tables."""

from __future__ import annotations

from castgraph.canon.db import ensure_schema
from castgraph.core.logging import get_logger, init_logging

logger = get_logger(__name__)


async def init_db() -> None:
    """Apply Alembic migrations under the schema advisory lock."""
    logger.info("Applying Alembic migrations to initialize the database")
    try:
        await ensure_schema()
        logger.info("Alembic migrations applied successfully")
    except Exception as e:
        logger.exception("Failed to apply Alembic migrations: %s", e)
        raise


if __name__ == "__main__":  # pragma: no cover - CLI execution
    import asyncio

    init_logging()
    asyncio.run(init_db())
