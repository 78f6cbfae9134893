"""Alembic environment for the CastGraph relationship tables."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from castgraph.config import config as castgraph_config
from castgraph.models import Base

alembic_cfg = context.config

# Leave logging alone when invoked from a running application.
if alembic_cfg.config_file_name is not None and not alembic_cfg.attributes.get(
    "skip_logging"
):
    fileConfig(alembic_cfg.config_file_name, disable_existing_loggers=False)

if not alembic_cfg.get_main_option("sqlalchemy.url"):
    alembic_cfg.set_main_option(
        "sqlalchemy.url", castgraph_config.database.postgres_url.replace("%", "%%")
    )

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=alembic_cfg.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations over the configured async engine."""
    engine = async_engine_from_config(
        alembic_cfg.get_section(alembic_cfg.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
