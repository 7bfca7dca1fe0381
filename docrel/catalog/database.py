"""
Catalog engine management.

Builds the SQLAlchemy engine the materializer creates tables through.
"""

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, event, text  # type: ignore
from sqlalchemy.engine import Engine  # type: ignore
from sqlalchemy.exc import SQLAlchemyError  # type: ignore

from docrel.config.settings import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_catalog_engine(
    database_url: Optional[str] = None,
    echo: Optional[bool] = None,
) -> Engine:
    """
    Create an engine for the target catalog.

    Args:
        database_url: SQLAlchemy URL; defaults to the configured catalog
        echo: Log emitted SQL; defaults to the debug setting

    Returns:
        Engine with foreign keys enforced on SQLite
    """
    settings = get_settings()
    url = database_url or settings.database_url
    echo = settings.debug if echo is None else echo

    if url.startswith("sqlite"):
        engine = create_engine(url, echo=echo, future=True)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    # pool_pre_ping: verify connections before use
    # pool_recycle: drop connections older than an hour
    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=echo,
        future=True,
    )


@lru_cache()
def get_engine() -> Engine:
    return create_catalog_engine()


def check_database_connection(engine: Optional[Engine] = None) -> bool:
    """Return True if the catalog database answers a trivial query."""
    try:
        with (engine or get_engine()).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
