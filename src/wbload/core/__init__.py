"""
Core loading module for wbload.

Provides:
- Pivoting of downloaded records into result tables
- Export to CSV and Parquet
- Reading result tables back
"""

from wbload.core.export import ExportFormat, export_table
from wbload.core.query import read_table
from wbload.core.tabularize import LoadSummary, load_records, period_to_year

__all__ = [
    "ExportFormat",
    "LoadSummary",
    "export_table",
    "load_records",
    "period_to_year",
    "read_table",
]
