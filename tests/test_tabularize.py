"""
Unit tests for staging and pivoting records into result tables.
"""
import pandas as pd
import pytest

from wbload.core.query import read_table
from wbload.core.tabularize import STAGING_TABLE, load_records, period_to_year, pivot_statement
from wbload.db.connection import table_exists
from wbload.errors import PeriodError, StoreError
from wbload.ingestion.models import IndicatorRecord


@pytest.fixture
def records(make_record):
    """Build IndicatorRecord objects from (country, iso3, date, value) tuples."""
    def _make(*rows):
        return [
            IndicatorRecord.model_validate(make_record(country=c, iso3=i, date=d, value=v))
            for c, i, d, v in rows
        ]
    return _make


@pytest.mark.parametrize("period, year", [("2020", 2020), ("1960", 1960), ("0999", 999)])
def test_period_to_year(period, year):
    assert period_to_year(period) == year


@pytest.mark.parametrize("period", ["2020Q1", "2020M01", "20", "", "YR2020", " 2020"])
def test_period_to_year_rejects_non_years(period):
    with pytest.raises(PeriodError):
        period_to_year(period)


def test_pivot_statement_lists_years():
    sql = pivot_statement("NY_GDP_MKTP_CD", [2019, 2020])

    assert 'CREATE OR REPLACE TABLE "NY_GDP_MKTP_CD"' in sql
    assert "ON period IN (2019, 2020)" in sql
    assert "USING SUM(value) GROUP BY name, iso3" in sql


def test_load_records_sums_duplicate_entity_periods(conn, records):
    """Two values for the same entity and year end up summed in one cell."""
    summary = load_records(conn, records(("A", "A3", "2020", 10.0), ("A", "A3", "2020", 5.0)), "T")

    df = read_table(conn, "T")

    assert list(df.columns) == ["name", "iso3", "2020"]
    assert len(df) == 1
    assert df.loc[0, "name"] == "A"
    assert df.loc[0, "2020"] == 15.0
    assert summary.rows == 2
    assert summary.entities == 1
    assert summary.periods == [2020]


def test_load_records_one_row_per_entity_one_column_per_year(conn, records):
    load_records(
        conn,
        records(
            ("Argentina", "ARG", "2021", 2.0),
            ("Argentina", "ARG", "2020", 1.0),
            ("Brazil", "BRA", "2020", 3.0),
        ),
        "GDP",
    )

    df = read_table(conn, "GDP")

    assert list(df.columns) == ["name", "iso3", "2020", "2021"]
    assert df["name"].tolist() == ["Argentina", "Brazil"]
    assert df.loc[0, "2020"] == 1.0
    assert df.loc[0, "2021"] == 2.0
    assert df.loc[1, "2020"] == 3.0
    assert pd.isna(df.loc[1, "2021"])


def test_load_records_keeps_null_values_null(conn, records):
    load_records(conn, records(("Chile", "CHL", "2020", None)), "T")

    df = read_table(conn, "T")

    assert pd.isna(df.loc[0, "2020"])


def test_load_records_empty_creates_empty_table(conn):
    summary = load_records(conn, [], "EMPTY")

    assert table_exists(conn, "EMPTY")
    df = read_table(conn, "EMPTY")
    assert list(df.columns) == ["name", "iso3"]
    assert df.empty
    assert summary.entities == 0
    assert summary.periods == []


def test_load_records_replaces_existing_table(conn, records):
    load_records(conn, records(("A", "A3", "2020", 1.0)), "T")
    load_records(conn, records(("B", "B3", "2021", 2.0)), "T")

    df = read_table(conn, "T")

    assert list(df.columns) == ["name", "iso3", "2021"]
    assert df["name"].tolist() == ["B"]


def test_load_records_drops_staging_table(conn, records):
    load_records(conn, records(("A", "A3", "2020", 1.0)), "T")

    assert not table_exists(conn, STAGING_TABLE)


def test_load_records_rejects_non_year_period_without_writing(conn, records):
    with pytest.raises(PeriodError, match="2020Q1"):
        load_records(conn, records(("A", "A3", "2020", 1.0), ("A", "A3", "2020Q1", 1.0)), "T")

    assert not table_exists(conn, "T")


def test_load_records_quotes_table_names(conn, records):
    load_records(conn, records(("A", "A3", "2020", 1.0)), "my table")

    assert table_exists(conn, "my table")


def test_read_table_missing_raises_store_error(conn):
    with pytest.raises(StoreError, match="MISSING"):
        read_table(conn, "MISSING")


def test_read_table_limit(conn, records):
    load_records(conn, records(("A", "A3", "2020", 1.0), ("B", "B3", "2020", 1.0)), "T")

    assert len(read_table(conn, "T", limit=1)) == 1
