"""
World Bank API access for wbload.
"""

from wbload.ingestion.base import DownloadResult
from wbload.ingestion.models import IndicatorInfo, IndicatorRecord, PageInfo, SourceInfo
from wbload.ingestion.pages import fetch_page, parse_page
from wbload.ingestion.world_bank import WorldBankClient

__all__ = [
    "DownloadResult",
    "IndicatorInfo",
    "IndicatorRecord",
    "PageInfo",
    "SourceInfo",
    "WorldBankClient",
    "fetch_page",
    "parse_page",
]
