"""
Download pipeline: existence check, download, pivot, export.
"""

import logging
from datetime import datetime

from sqlalchemy.engine import Connection

from wbload.config import DownloadConfig, DownloadStatus
from wbload.core.export import export_table
from wbload.core.tabularize import load_records
from wbload.db.connection import table_exists
from wbload.ingestion.base import DownloadResult
from wbload.ingestion.world_bank import WorldBankClient

logger = logging.getLogger(__name__)


def run_download(
    config: DownloadConfig,
    client: WorldBankClient,
    conn: Connection,
) -> DownloadResult:
    """
    Run one indicator download end to end.

    If the destination table already exists and ``config.force`` is not set,
    nothing is downloaded and the table is left as is; requested exports
    still run against it.

    Args:
        config: Download options.
        client: API client.
        conn: Open database connection.

    Returns:
        DownloadResult describing what happened.

    Raises:
        WbLoadError: On the first failure of any step.
    """
    table = config.table_name
    result = DownloadResult(
        indicator=config.indicator,
        table=table,
        started_at=datetime.now(),
    )

    if not config.force and table_exists(conn, table):
        logger.info("Table %s already exists, skipping download (use --force to refresh)", table)
        result.status = DownloadStatus.SKIPPED
    else:
        records = client.download_indicator(config.indicator, config.timeframe, config.per_page)
        summary = load_records(conn, records, table)
        result.records = summary.rows
        result.entities = summary.entities
        result.periods = summary.periods

    result.exported = export_table(
        conn,
        table,
        csv_path=config.csv_path,
        parquet_path=config.parquet_path,
    )
    result.completed_at = datetime.now()
    return result
