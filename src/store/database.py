"""Engine construction for the persistent store.

This module turns runtime config into a SQLAlchemy engine, applies the
driver timeout, and creates the schema on first use.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from core.config import LocusConfig
from core.errors import LocusConfigError, LocusStoreConnectionError
from core.logging_config import get_logger
from store.schema import Base

_LOGGER = get_logger(__name__)


def build_engine(config: LocusConfig) -> Engine:
    """Create an engine for the configured database URL.

    Args:
        config: Runtime configuration.

    Returns:
        Engine with the store timeout applied to new connections.

    Raises:
        LocusConfigError: If the database URL cannot be parsed.
        LocusStoreConnectionError: If the SQLite directory cannot be created.
    """
    try:
        url = make_url(config.database_url)
    except ArgumentError as error:
        raise LocusConfigError(
            f"Invalid LOCUS_DATABASE_URL '{config.database_url}': {error}. "
            "Use a SQLAlchemy URL such as sqlite:///locus.db."
        ) from error
    connect_args: dict[str, Any] = {}
    backend = url.get_backend_name()
    if backend == "sqlite":
        connect_args["timeout"] = config.db_timeout_seconds
        if url.database and url.database != ":memory:":
            _ensure_database_directory(Path(url.database).expanduser())
    elif backend == "postgresql":
        connect_args["connect_timeout"] = config.db_timeout_seconds
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def open_store_engine(config: LocusConfig) -> Engine:
    """Build an engine, check connectivity, and create missing tables.

    Args:
        config: Runtime configuration.

    Returns:
        Ready-to-use engine.

    Raises:
        LocusStoreConnectionError: If the store cannot be reached.
    """
    engine = build_engine(config)
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(engine)
    except SQLAlchemyError as error:
        engine.dispose()
        raise LocusStoreConnectionError(
            f"Failed to connect to store at {engine.url.render_as_string(hide_password=True)}: "
            f"{error}. Check LOCUS_DATABASE_URL and that the database is reachable."
        ) from error
    _LOGGER.debug("store_opened", database_url=engine.url.render_as_string(hide_password=True))
    return engine


def _ensure_database_directory(database_path: Path) -> None:
    try:
        database_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise LocusStoreConnectionError(
            f"Failed to create database directory {database_path.parent}: {error}. "
            "Point LOCUS_DATABASE_URL or LOCUS_DATA_ROOT at a writable location."
        ) from error
