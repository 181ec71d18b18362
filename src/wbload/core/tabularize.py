"""
Load downloaded indicator records into a wide result table.

Records are staged in long format (name, iso3, period, value) in a temporary
table, then pivoted into one column per year. Several values for the same
entity and year are summed.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from wbload.db.connection import quote_identifier
from wbload.errors import PeriodError, StoreError
from wbload.ingestion.models import IndicatorRecord

logger = logging.getLogger(__name__)

STAGING_TABLE = "wbload_staging"

_YEAR_PATTERN = re.compile(r"\d{4}")


@dataclass
class LoadSummary:
    """Outcome of loading records into a result table."""

    table: str
    rows: int = 0
    entities: int = 0
    periods: list[int] = field(default_factory=list)


def period_to_year(period: str) -> int:
    """
    Convert an API period label to a year.

    Only plain four-digit years are accepted; quarterly or monthly labels
    such as "2020Q1" or "2020M01" are rejected.

    Raises:
        PeriodError: If the label is not a four-digit year.
    """
    if not _YEAR_PATTERN.fullmatch(period):
        raise PeriodError(f"Period {period!r} is not a four-digit year")
    return int(period)


def staging_rows(records: Iterable[IndicatorRecord]) -> list[dict[str, Any]]:
    """Project records onto staging rows."""
    return [
        {
            "name": record.country.value,
            "iso3": record.iso3,
            "period": period_to_year(record.period),
            "value": record.value,
        }
        for record in records
    ]


def pivot_statement(table: str, periods: list[int]) -> str:
    """
    Build the statement that (re)creates the result table from staging.

    With no periods there is nothing to pivot on, so the table is created
    with the entity columns only.
    """
    target = quote_identifier(table)
    if not periods:
        return (
            f"CREATE OR REPLACE TABLE {target} AS "
            f"SELECT name, iso3 FROM {STAGING_TABLE} GROUP BY name, iso3"
        )

    years = ", ".join(str(p) for p in periods)
    return (
        f"CREATE OR REPLACE TABLE {target} AS "
        f"PIVOT {STAGING_TABLE} ON period IN ({years}) "
        f"USING SUM(value) GROUP BY name, iso3"
    )


def load_records(
    conn: Connection,
    records: list[IndicatorRecord],
    table: str,
) -> LoadSummary:
    """
    Replace ``table`` with the pivot of ``records``.

    Args:
        conn: Open database connection.
        records: Downloaded records.
        table: Destination table name.

    Returns:
        LoadSummary with row, entity and period counts.

    Raises:
        PeriodError: If a record period is not a year. Nothing is written.
        StoreError: If any statement fails. The transaction is rolled back.
    """
    rows = staging_rows(records)
    periods = sorted({row["period"] for row in rows})

    try:
        conn.exec_driver_sql(
            f"CREATE OR REPLACE TEMPORARY TABLE {STAGING_TABLE} "
            "(name VARCHAR, iso3 VARCHAR, period INTEGER, value DOUBLE)"
        )
        if rows:
            conn.execute(
                text(f"INSERT INTO {STAGING_TABLE} VALUES (:name, :iso3, :period, :value)"),
                rows,
            )
        logger.info("Creating table: %s", table)
        conn.exec_driver_sql(pivot_statement(table, periods))
        entities = conn.exec_driver_sql(
            f"SELECT COUNT(*) FROM {quote_identifier(table)}"
        ).scalar_one()
        conn.exec_driver_sql(f"DROP TABLE {STAGING_TABLE}")
        conn.commit()
    except SQLAlchemyError as e:
        conn.rollback()
        raise StoreError(f"Failed to load table {table}: {e}") from e

    return LoadSummary(table=table, rows=len(rows), entities=entities, periods=periods)
