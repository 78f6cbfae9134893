# src/castgraph/canon/db.py
"""Database session creation, migrations, and helpers."""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from alembic import command as alembic_command  # type: ignore[attr-defined]
from alembic.config import Config
from sqlalchemy import BigInteger, bindparam
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql import func, select

from castgraph.config import config
from castgraph.core.logging import get_logger

logger = get_logger(__name__)

DATABASE_URL = config.database.postgres_url

_ENGINE = create_async_engine(DATABASE_URL, echo=config.database.echo)
SessionLocal = async_sessionmaker(
    bind=_ENGINE, class_=AsyncSession, expire_on_commit=False
)

# Stable advisory lock id for schema setup, truncated to a positive BIGINT.
_RAW_LOCK_ID = 0x43617374477261706853434845
SCHEMA_LOCK_ID = int(_RAW_LOCK_ID & 0x7FFF_FFFF_FFFF_FFFF)


def alembic_config() -> Config:
    """Return the Alembic config for the repository root ``alembic.ini``."""
    root = Path(__file__).resolve().parents[3]
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("script_location", str(root / "alembic"))
    cfg.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))
    cfg.attributes["skip_logging"] = True
    return cfg


@asynccontextmanager
async def get_pg() -> AsyncIterator[AsyncSession]:
    """Return a SQLAlchemy asynchronous session."""
    try:
        async with SessionLocal() as session:
            yield session
    except SQLAlchemyError as exc:  # pragma: no cover - connection errors
        logger.error("PostgreSQL session error: %s", exc)
        raise


@asynccontextmanager
async def advisory_lock(session: AsyncSession, lock_id: int) -> AsyncIterator[None]:
    """Hold a PostgreSQL session-level advisory lock for the block.

    Uses explicit bigint casts to avoid psycopg/SQLAlchemy binding as NUMERIC.
    """
    stmt_lock = select(func.pg_advisory_lock(bindparam("id", type_=BigInteger))).params(
        id=int(lock_id)
    )
    await session.execute(stmt_lock)
    logger.debug("Acquired advisory lock %d", lock_id)
    try:
        yield
    finally:
        stmt_unlock = select(
            func.pg_advisory_unlock(bindparam("id", type_=BigInteger))
        ).params(id=int(lock_id))
        await session.execute(stmt_unlock)
        logger.debug("Released advisory lock %d", lock_id)


async def ensure_schema() -> None:
    """Apply Alembic migrations once, serialized across processes.

    Multiple startup paths (Uvicorn reloaders, several workers) may call this
    concurrently; the advisory lock makes the upgrade run one at a time.
    """
    start_time = time.time()
    logger.info("Ensuring relationship schema is up to date")
    cfg = alembic_config()
    async with get_pg() as session:
        async with advisory_lock(session, SCHEMA_LOCK_ID):
            # Alembic drives its own synchronous engine.
            await asyncio.to_thread(alembic_command.upgrade, cfg, "heads")
    logger.info("Schema ready in %.2fs", time.time() - start_time)


__all__ = [
    "SessionLocal",
    "get_pg",
    "advisory_lock",
    "ensure_schema",
    "alembic_config",
]
