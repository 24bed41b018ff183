"""
Alembic environment for the garage schema.

The database URL comes from garage.config (DATABASE_URL, .env), never from
alembic.ini. Every model is imported through garage.models so autogenerate
sees the full metadata.
"""

import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from alembic import context

# ─── Make the project root importable ─────────────────────────────────────────
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from garage.config import settings
from garage.database import Base, engine_connect_args
import garage.models  # noqa: F401  registers every table on Base.metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

DATABASE_URL = settings.DATABASE_URL
# SQLite cannot ALTER most constraints in place; batch mode rebuilds the table
IS_SQLITE = DATABASE_URL.startswith("sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        render_as_batch=IS_SQLITE,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of touching the database."""
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # Same TLS settings as the application engine, without pooling
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool, connect_args=engine_connect_args())

    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
