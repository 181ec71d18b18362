"""
Read result tables back into DataFrames.
"""

import pandas as pd
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from wbload.db.connection import quote_identifier
from wbload.errors import StoreError


def read_table(conn: Connection, table: str, limit: int | None = None) -> pd.DataFrame:
    """
    Load a result table into a DataFrame.

    Args:
        conn: Open database connection.
        table: Table name.
        limit: Maximum number of rows. If None, read everything.

    Returns:
        DataFrame with the table's columns, ordered by entity name.
    """
    sql = f"SELECT * FROM {quote_identifier(table)} ORDER BY name"
    if limit is not None:
        sql += f" LIMIT {int(limit)}"

    try:
        result = conn.exec_driver_sql(sql)
        columns = list(result.keys())
        rows = result.fetchall()
    except SQLAlchemyError as e:
        conn.rollback()
        raise StoreError(f"Cannot read table {table}: {e}") from e

    return pd.DataFrame([tuple(row) for row in rows], columns=columns)
