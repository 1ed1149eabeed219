"""
Alembic Migration Environment
===============================

What:  Runs the storefront migrations against DATABASE_URL.
How:   Online mode opens an async engine (aiomysql in production) and hands
       Alembic a sync view of the connection through run_sync(). Offline mode
       (`alembic upgrade head --sql`) only renders SQL.

URL precedence:
    1. `alembic -x url=mysql+aiomysql://... upgrade head`
    2. DATABASE_URL / .env, read through app.config.settings

Each revision runs in its own transaction, so a failed step leaves the
earlier revisions applied and `alembic current` accurate.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from app.config import settings
from app.database import Base

# Importing the package registers every storefront table on Base.metadata
import app.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

database_url = context.get_x_argument(as_dictionary=True).get("url") or settings.database_url


def _configure_options() -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "transaction_per_migration": True,
        # SQLite cannot ALTER most constraints; batch mode rebuilds the table.
        "render_as_batch": database_url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, **_configure_options())
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(_run_online())
