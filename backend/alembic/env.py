"""
Alembic Migration Environment
===============================

What:  Migrates the store named by DATABASE_URL (alembic.ini carries no URL).
Who:   `alembic upgrade head`, `alembic revision --autogenerate`.

Modes:
    offline  `alembic upgrade head --sql` renders the DDL as a script
    online   connects through a one-shot async engine (asyncpg, or
             aiosqlite for local runs) and migrates in one transaction
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

import projecthub.models  # noqa: F401
from projecthub.config import settings
from projecthub.database import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _configure(**options) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode copies the table
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=settings.database_url.startswith("sqlite"),
        **options,
    )


def _migrate(connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


def migrate_offline() -> None:
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
