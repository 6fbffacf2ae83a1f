"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration, with an
in-memory SQLite fallback under pytest, and exposes the unit-of-work helpers
that repositories are called within.
"""
from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from functools import lru_cache
from typing import Callable, Iterator, Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from clusterstore.settings import POSTGRES_COMPONENTS, get_settings

logger = logging.getLogger(__name__)

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while a test runs, so also accept
    pytest already being imported (collection time) or an explicit
    ``PYTEST_RUNNING=1``.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _url_from_components(components: Mapping[str, Optional[str]]) -> Optional[str]:
    """Build a postgres URL from the POSTGRES_* values, or None when none are set."""
    if not any(components.values()):
        return None
    missing = [name for name in POSTGRES_COMPONENTS if not components.get(name)]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")
    return (
        f"postgresql://{components['POSTGRES_USER']}:{components['POSTGRES_PASSWORD']}"
        f"@{components['POSTGRES_HOST']}:{components['POSTGRES_PORT']}/{components['POSTGRES_DB']}"
    )


def get_database_url() -> str:
    """Resolve the database URL.

    ``DATABASE_URL`` wins over the POSTGRES_* components; a partial set of
    components raises ValueError. Under pytest with nothing configured the
    in-memory SQLite URL is used.
    """
    settings = get_settings()
    url = settings.database_url or _url_from_components(settings.postgres)
    if url:
        return url
    if _is_pytest_runtime():
        return SQLITE_MEMORY_URL
    raise ValueError(
        "No database configured. Set DATABASE_URL or all of "
        "POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DB."
    )


def _engine_kwargs(url: str) -> dict:
    settings = get_settings()
    kwargs: dict = {"echo": settings.sql_echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            # One shared connection so the schema survives across sessions
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = settings.pool_pre_ping
    return kwargs


def create_db_engine(url: Optional[str] = None) -> Engine:
    """Create an engine for ``url`` (or the configured URL)."""
    url = url or get_database_url()
    engine = create_engine(url, **_engine_kwargs(url))
    logger.debug("Created engine for dialect %s", engine.dialect.name)
    return engine


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    return create_db_engine()


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@lru_cache(maxsize=None)
def get_session_factory() -> sessionmaker:
    return make_session_factory(get_engine())


def reset_engine() -> None:
    """Dispose of the cached engine and session factory (useful for tests)."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    get_session_factory.cache_clear()


def init_schema(engine: Optional[Engine] = None) -> None:
    """Create every table known to the ORM metadata if it does not exist yet."""
    from clusterstore.db import models  # local import to avoid circular import at module load

    engine = engine or get_engine()
    models.Base.metadata.create_all(bind=engine)
    logger.info("Schema ready on %s", engine.dialect.name)


def get_db() -> Iterator[Session]:
    """Yield a session and close it once the caller is done."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(session_factory: Optional[Callable[[], Session]] = None) -> Iterator[Session]:
    """Run a unit of work: commit on success, roll back and re-raise on error.

    Repository functions never commit on their own; this is the transaction
    boundary they run inside.
    """
    factory = session_factory or get_session_factory()
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        logger.warning("Rolling back unit of work after error", exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()
