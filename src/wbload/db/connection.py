"""
Database connection management for wbload.

Result tables live in a DuckDB database reached through SQLAlchemy. A command
holds a single connection for its whole run, so temporary tables created
during a load stay visible until it finishes.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import URL, create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from wbload.errors import StoreError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


def get_engine(database: Path | str | None = None) -> Engine:
    """
    Create a SQLAlchemy engine for a DuckDB database.

    Args:
        database: Database file. If None, an in-memory database is used.

    Returns:
        SQLAlchemy Engine instance.
    """
    url = URL.create("duckdb", database=str(database) if database else MEMORY_DATABASE)
    return create_engine(url)


@contextmanager
def connection_scope(
    database: Path | str | None = None,
) -> Generator[Connection, None, None]:
    """
    Open one connection for the duration of a command.

    Usage:
        with connection_scope("indicators.duckdb") as conn:
            conn.exec_driver_sql("SELECT 1")

    Raises:
        StoreError: If the database cannot be opened.
    """
    engine = get_engine(database)
    try:
        conn = engine.connect()
    except SQLAlchemyError as e:
        engine.dispose()
        raise StoreError(f"Cannot open database {database or MEMORY_DATABASE}: {e}") from e

    logger.debug("Opened database %s", database or MEMORY_DATABASE)
    try:
        yield conn
    finally:
        conn.close()
        engine.dispose()


def quote_identifier(name: str) -> str:
    """Quote a table or column name for interpolation into SQL."""
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    """Quote a string literal for interpolation into SQL."""
    return "'" + value.replace("'", "''") + "'"


def table_exists(conn: Connection, table: str) -> bool:
    """
    Check whether a table exists by selecting one row from it.

    A failing select is taken to mean the table is absent; the error itself is
    not reported.

    Args:
        conn: Open database connection.
        table: Table name.

    Returns:
        True if the select succeeded.
    """
    try:
        conn.exec_driver_sql(f"SELECT * FROM {quote_identifier(table)} LIMIT 1").fetchall()
    except DBAPIError:
        # DuckDB aborts the transaction on a failed statement
        conn.rollback()
        return False
    return True
