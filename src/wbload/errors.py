"""
Exception hierarchy for wbload.

Every failure is fatal to the running command; the CLI reports the message
and exits with a non-zero status.
"""


class WbLoadError(Exception):
    """Base exception for all wbload failures."""


class FetchError(WbLoadError):
    """Raised when a page cannot be fetched or the API answers with a non-200 status."""


class PageDecodeError(WbLoadError):
    """Raised when a response body does not have the expected [page_info, records] shape."""


class PeriodError(WbLoadError):
    """Raised when a record period is not a four-digit year."""


class StoreError(WbLoadError):
    """Raised for database statement failures (connect, DDL, DML, export)."""
