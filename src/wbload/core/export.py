"""
Data Export Utilities.

Copy result tables out of the database to CSV and Parquet files with
DuckDB's COPY statement.
"""

import logging
from enum import Enum
from pathlib import Path

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from wbload.db.connection import quote_identifier, quote_literal
from wbload.errors import StoreError

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    """Supported export formats."""
    CSV = "csv"
    PARQUET = "parquet"


COPY_OPTIONS = {
    ExportFormat.CSV: "(HEADER, DELIMITER ',')",
    ExportFormat.PARQUET: "(FORMAT PARQUET)",
}


def copy_statement(table: str, path: Path | str, format: ExportFormat) -> str:
    """Build the COPY statement writing ``table`` to ``path``."""
    return f"COPY {quote_identifier(table)} TO {quote_literal(str(path))} {COPY_OPTIONS[format]}"


def export_table(
    conn: Connection,
    table: str,
    csv_path: Path | str | None = None,
    parquet_path: Path | str | None = None,
) -> list[Path]:
    """
    Export a table to the requested files.

    CSV is written first, then Parquet. The first failure aborts the export.

    Args:
        conn: Open database connection.
        table: Table to export.
        csv_path: CSV destination (with header row), if wanted.
        parquet_path: Parquet destination, if wanted.

    Returns:
        Paths written, in order.

    Raises:
        StoreError: If a COPY statement fails.
    """
    targets = [
        (ExportFormat.CSV, csv_path),
        (ExportFormat.PARQUET, parquet_path),
    ]

    written = []
    for format, path in targets:
        if not path:
            continue
        logger.info("Exporting %s to %s", table, path)
        try:
            conn.exec_driver_sql(copy_statement(table, path, format))
        except SQLAlchemyError as e:
            conn.rollback()
            raise StoreError(f"Failed to export {table} to {format.value}: {e}") from e
        written.append(Path(path))

    return written
