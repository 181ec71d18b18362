"""
wbload - download World Bank indicators into DuckDB tables.
"""

__version__ = "0.1.0"
