"""
Fetching and decoding of single API pages.
"""

import json
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from wbload.errors import FetchError, PageDecodeError
from wbload.ingestion.models import PageInfo

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def fetch_page(client: httpx.Client, url: str) -> bytes:
    """
    Issue one GET request and return the raw body.

    Args:
        client: HTTP client used for the request.
        url: Fully formed page URL.

    Returns:
        Response body on HTTP 200.

    Raises:
        FetchError: On transport failure or any non-200 status.
    """
    logger.debug("Downloading: %s", url)
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    if response.status_code != httpx.codes.OK:
        raise FetchError(f"{url} returned HTTP {response.status_code}")

    return response.content


def parse_page(
    payload: bytes,
    record_model: type[RecordT],
) -> tuple[PageInfo, list[RecordT]]:
    """
    Decode a ``[page_info, records]`` response body.

    The top-level shape is checked first, then each slot is validated on its
    own. A malformed page is rejected as a whole.

    Args:
        payload: Raw response body.
        record_model: Model used to validate each entry of the second slot.

    Returns:
        Tuple of (page info, records).

    Raises:
        PageDecodeError: If the body is not JSON, is not a two-element array,
            or either slot fails validation.
    """
    try:
        document = json.loads(payload)
    except ValueError as e:
        raise PageDecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(document, list) or len(document) != 2:
        raise PageDecodeError(_describe_bad_shape(document))

    info_slot, records_slot = document

    try:
        page_info = PageInfo.model_validate(info_slot)
    except ValidationError as e:
        raise PageDecodeError(f"Invalid page info: {e}") from e

    # The API sends null instead of [] when a query matches nothing
    if records_slot is None and page_info.total == 0:
        return page_info, []

    try:
        records = TypeAdapter(list[record_model]).validate_python(records_slot)
    except ValidationError as e:
        raise PageDecodeError(f"Invalid records on page {page_info.page}: {e}") from e

    return page_info, records


def _describe_bad_shape(document: Any) -> str:
    """Build an error message for a body that is not a two-element array."""
    # Errors come back as [{"message": [{"id": ..., "key": ..., "value": ...}]}]
    if isinstance(document, list) and document and isinstance(document[0], dict):
        messages = document[0].get("message")
        if isinstance(messages, list):
            text = "; ".join(
                str(m.get("value") or m.get("key"))
                for m in messages
                if isinstance(m, dict)
            )
            if text:
                return f"API error: {text}"

    if isinstance(document, list):
        return f"Expected a two-element array, got {len(document)} element(s)"
    return f"Expected a two-element array, got {type(document).__name__}"
