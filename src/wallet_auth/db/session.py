"""Engine and session wiring for the identity and token tables."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from wallet_auth.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Model modules must be imported for Base.metadata to see their tables.
import wallet_auth.models  # noqa: E402,F401


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def engine_options(url: str) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments suited to ``url``.

    The default ``DATABASE_URL`` is a SQLite file. FastAPI runs sync routes in
    a thread pool, so SQLite connections must be usable outside the thread
    that opened them.
    """
    options: dict[str, Any] = {"pool_pre_ping": True}
    if is_sqlite(url):
        options["connect_args"] = {"check_same_thread": False}
    return options


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False, **overrides: Any) -> Engine:
    """Create an engine for ``url`` with the project's connection options."""
    options = engine_options(url)
    options.update(overrides)
    new_engine = create_engine(url, echo=echo, **options)
    if is_sqlite(url):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
