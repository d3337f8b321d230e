import datetime
from typing import Optional

import pytz
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine

from common.config import Settings, get_settings, require_database_url
from common.exceptions import StorageError
from data_sources.model import metadata


def create_db_engine(settings: Optional[Settings] = None, echo: bool = False) -> Engine:
    """
    Build the SQLAlchemy engine from DATABASE_URL.
    Raises ConfigError when the URL is missing.
    """
    settings = settings or get_settings()
    url = require_database_url(settings)

    connect_args = {}
    if url.startswith("postgresql") and settings.DATABASE_SSLMODE:
        connect_args["sslmode"] = settings.DATABASE_SSLMODE

    return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def init_db(engine):
    """
    Creates all roulette tables that do not exist yet. Safe to call on every run.
    """
    metadata.create_all(bind=engine)


def upsert_insert(engine, table):
    """
    Dialect-specific INSERT that supports ON CONFLICT ... DO NOTHING and RETURNING.
    """
    name = engine.dialect.name
    if name == "postgresql":
        return postgresql.insert(table)
    if name == "sqlite":
        return sqlite.insert(table)
    raise StorageError(f"Unsupported database dialect for upserts: {name}", operation="insert")


def driver_message(exc):
    """Driver-level text of a SQLAlchemy error, without the SQL and bound parameters."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc).strip()


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(pytz.UTC)


def as_utc(value):
    """
    Timestamps read back from backends without timezone support come out naive;
    everything this project writes is UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=pytz.UTC)
    return value.astimezone(pytz.UTC)
