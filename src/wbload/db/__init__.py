"""
Database package for wbload.
"""

from wbload.db.connection import (
    connection_scope,
    get_engine,
    quote_identifier,
    quote_literal,
    table_exists,
)

__all__ = [
    "connection_scope",
    "get_engine",
    "quote_identifier",
    "quote_literal",
    "table_exists",
]
