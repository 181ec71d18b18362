"""
World Bank Open Data API client.

Talks to the v2 REST API directly with httpx.
API: https://datahelpdesk.worldbank.org/knowledgebase/topics/125589
"""

import logging

import httpx

from wbload.config import settings
from wbload.ingestion.models import IndicatorInfo, IndicatorRecord, SourceInfo
from wbload.ingestion.pages import fetch_page, parse_page

logger = logging.getLogger(__name__)


class WorldBankClient:
    """Client for the World Bank indicator and catalog endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root. Defaults to ``settings.api_base``.
            http_client: Pre-configured httpx client. If None, one is created
                with the configured request timeout.
        """
        self.base_url = (base_url or settings.api_base).rstrip("/")
        self.client = http_client or httpx.Client(timeout=settings.request_timeout)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "WorldBankClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # URLs
    # -------------------------------------------------------------------------

    def indicator_url(self, indicator: str, timeframe: str, per_page: int, page: int) -> str:
        """Build the URL of one page of indicator observations for all countries."""
        return str(
            httpx.URL(
                f"{self.base_url}/country/all/indicator/{indicator}",
                params={"format": "json", "date": timeframe, "per_page": per_page, "page": page},
            )
        )

    def sources_url(self, per_page: int) -> str:
        return str(httpx.URL(f"{self.base_url}/sources", params={"format": "json", "per_page": per_page}))

    def source_indicators_url(self, source_id: int, per_page: int) -> str:
        return str(
            httpx.URL(
                f"{self.base_url}/sources/{source_id}/indicators",
                params={"format": "json", "per_page": per_page},
            )
        )

    # -------------------------------------------------------------------------
    # Downloads
    # -------------------------------------------------------------------------

    def download_indicator(
        self,
        indicator: str,
        timeframe: str,
        per_page: int | None = None,
    ) -> list[IndicatorRecord]:
        """
        Download every observation of an indicator over a timeframe.

        Pages are fetched one after another. The page count comes from the
        first page; metadata of later pages is not consulted.

        Args:
            indicator: Indicator code, e.g. NY.GDP.MKTP.CD.
            timeframe: Date expression passed to the API as is (e.g. "2023:2010").
            per_page: Page size. Defaults to ``settings.per_page``.

        Returns:
            All records, in page order then in-page order.

        Raises:
            FetchError: If any page cannot be fetched.
            PageDecodeError: If any page is malformed.
        """
        per_page = per_page or settings.per_page

        payload = fetch_page(self.client, self.indicator_url(indicator, timeframe, per_page, 1))
        first, records = parse_page(payload, IndicatorRecord)
        logger.info("Page %d/%d (total records: %d)", 1, first.pages, first.total)

        for page in range(2, first.pages + 1):
            payload = fetch_page(self.client, self.indicator_url(indicator, timeframe, per_page, page))
            _, page_records = parse_page(payload, IndicatorRecord)
            records.extend(page_records)
            logger.info("Page %d/%d (total records: %d)", page, first.pages, first.total)

        if len(records) != first.total:
            logger.warning(
                "Downloaded %d records but the API announced %d", len(records), first.total
            )

        return records

    def list_sources(self, per_page: int | None = None) -> list[SourceInfo]:
        """List the data sources published by the API (single request)."""
        per_page = per_page or settings.sources_per_page
        payload = fetch_page(self.client, self.sources_url(per_page))
        _, sources = parse_page(payload, SourceInfo)
        return sources

    def list_indicators(self, source_id: int, per_page: int | None = None) -> list[IndicatorInfo]:
        """List the indicators available in one source (single request)."""
        per_page = per_page or settings.indicators_per_page
        payload = fetch_page(self.client, self.source_indicators_url(source_id, per_page))
        _, indicators = parse_page(payload, IndicatorInfo)
        return indicators
