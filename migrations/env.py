"""Alembic environment for the wallet identity and token tables.

``alembic.ini`` puts ``src`` on the path; the target database comes from
``ALEMBIC_URL`` when set, otherwise from the application settings.
"""
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context

from wallet_auth.core.settings import settings
from wallet_auth.db.session import Base, build_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def migration_url() -> str:
    return os.getenv("ALEMBIC_URL") or settings.effective_database_url


def include_object(obj, name, type_, reflected, compare_to):
    """Leave Alembic's own bookkeeping table out of autogenerate diffs."""
    return not (type_ == "table" and name == "alembic_version")


def run_migrations_offline(url: str) -> None:
    """Emit the migration SQL for ``url`` without connecting."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    """Apply migrations over a connection from the application's engine factory."""
    connectable = build_engine(url)
    try:
        with connectable.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                include_object=include_object,
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline(migration_url())
else:
    run_migrations_online(migration_url())
