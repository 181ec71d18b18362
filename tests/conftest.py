"""
Pytest configuration and shared fixtures.
"""
from typing import Any, Callable

import httpx
import pytest

from wbload.db.connection import connection_scope
from wbload.ingestion.world_bank import WorldBankClient

BASE_URL = "https://api.test/v2"


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """Build one indicator observation as the API returns it."""
    def _make(
        country: str = "Argentina",
        iso3: str = "ARG",
        date: str = "2020",
        value: float | None = 1.0,
        indicator: str = "NY.GDP.MKTP.CD",
    ) -> dict[str, Any]:
        return {
            "indicator": {"id": indicator, "value": "GDP (current US$)"},
            "country": {"id": iso3[:2], "value": country},
            "countryiso3code": iso3,
            "date": date,
            "value": value,
            "unit": "",
            "obs_status": "",
            "decimal": 0,
        }
    return _make


@pytest.fixture
def make_page() -> Callable[..., list[Any]]:
    """Build a [page_info, records] response body."""
    def _make(
        records: list[Any] | None,
        page: int = 1,
        pages: int = 1,
        total: int | None = None,
        per_page: int = 1000,
    ) -> list[Any]:
        info = {
            "page": page,
            "pages": pages,
            "per_page": per_page,
            "total": len(records or []) if total is None else total,
            "sourceid": "2",
            "lastupdated": "2024-12-16",
        }
        return [info, records]
    return _make


@pytest.fixture
def fake_api():
    """
    Build WorldBankClient instances served by an in-process handler.

    No network access is made; the handler receives every httpx.Request.
    """
    clients = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> WorldBankClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = WorldBankClient(base_url=BASE_URL, http_client=http_client)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def paged_api(fake_api):
    """
    Client answering indicator requests from a {page_number: body} mapping.

    Returns (client, requests); requests collects what was asked for.
    """
    def _make(pages: dict[int, Any]) -> tuple[WorldBankClient, list[httpx.Request]]:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            page = int(request.url.params.get("page", "1"))
            return httpx.Response(200, json=pages[page])

        return fake_api(handler), requests
    return _make


@pytest.fixture
def offline_api(fake_api):
    """Client whose every request fails; returns (client, attempted requests)."""
    attempts: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ConnectError("network unreachable", request=request)

    return fake_api(handler), attempts


@pytest.fixture
def conn():
    """Connection to a fresh in-memory DuckDB database."""
    with connection_scope() as connection:
        yield connection
