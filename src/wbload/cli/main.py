"""
CLI for wbload.

Usage:
    wbload download -i NY.GDP.MKTP.CD -t 2023:2010 -d wb.duckdb --csv gdp.csv
    wbload sources                  # List data sources
    wbload indicators -s 2          # List indicators of a source
    wbload show NY_GDP_MKTP_CD -d wb.duckdb
"""

import logging
import math
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from wbload import __version__
from wbload.config import DownloadConfig, DownloadStatus, LogLevel, settings
from wbload.core.query import read_table
from wbload.db.connection import connection_scope
from wbload.errors import WbLoadError
from wbload.ingestion.world_bank import WorldBankClient
from wbload.pipeline import run_download

# Initialize Typer app
app = typer.Typer(
    name="wbload",
    help="Download World Bank indicators into DuckDB tables",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: LogLevel) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.value,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def get_client() -> WorldBankClient:
    """Build the API client used by commands."""
    return WorldBankClient()


def fail(error: Exception) -> NoReturn:
    """Report an error and exit with status 1."""
    rprint(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


# =============================================================================
# VERSION CALLBACK
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"[bold blue]wbload[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", case_sensitive=False, help="Logging level"),
    ] = settings.log_level,
) -> None:
    """wbload - World Bank indicators to DuckDB."""
    configure_logging(log_level)


# =============================================================================
# DOWNLOAD
# =============================================================================


@app.command("download")
def download(
    indicator: Annotated[
        str,
        typer.Option("--indicator", "-i", help="Indicator code to download"),
    ],
    timeframe: Annotated[
        str,
        typer.Option("--timeframe", "-t", help="Timeframe to download (ex: 2023:2010)"),
    ],
    database: Annotated[
        Optional[Path],
        typer.Option("--database", "-d", help="DuckDB database file (in-memory if omitted)"),
    ] = None,
    table: Annotated[
        Optional[str],
        typer.Option("--table", "-n", help="Destination table (default: indicator code with _ for .)"),
    ] = None,
    per_page: Annotated[
        int,
        typer.Option("--per-page", min=1, help="Records per API page"),
    ] = settings.per_page,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Download again even if the table exists"),
    ] = False,
    csv: Annotated[
        Optional[Path],
        typer.Option("--csv", help="CSV output file"),
    ] = None,
    parquet: Annotated[
        Optional[Path],
        typer.Option("--parquet", help="Parquet output file"),
    ] = None,
) -> None:
    """
    Download an indicator for all countries and pivot it by year.

    Examples:
        wbload download -i NY.GDP.MKTP.CD -t 2023:2010
        wbload download -i SP.POP.TOTL -t 2000:2023 -d wb.duckdb --parquet pop.parquet
        wbload download -i SP.POP.TOTL -t 2000:2023 -d wb.duckdb --force
    """
    config = DownloadConfig(
        indicator=indicator,
        timeframe=timeframe,
        database=database,
        table=table,
        per_page=per_page,
        force=force,
        csv_path=csv,
        parquet_path=parquet,
    )

    try:
        with get_client() as client, connection_scope(config.database) as conn:
            result = run_download(config, client, conn)
    except WbLoadError as e:
        fail(e)

    if result.status == DownloadStatus.SKIPPED:
        rprint(f"[yellow]Table {result.table} already exists, download skipped (use --force to refresh)[/yellow]")
    else:
        rprint(f"\n[green]Table {result.table} created![/green]")
        rprint(f"  Records:  {result.records:,}")
        rprint(f"  Entities: {result.entities:,}")
        if result.periods:
            rprint(f"  Years:    {result.periods[0]} - {result.periods[-1]}")
        rprint(f"  Duration: {result.duration_seconds:.1f}s")

    for path in result.exported:
        rprint(f"  Exported: {escape(str(path))}")


app.command("dl", hidden=True)(download)


# =============================================================================
# CATALOG LISTINGS
# =============================================================================


@app.command("sources")
def list_sources() -> None:
    """List the available data sources."""
    try:
        with get_client() as client:
            sources = client.list_sources()
    except WbLoadError as e:
        fail(e)

    table = Table(title="Sources")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")

    for source in sources:
        table.add_row(escape(source.id), escape(source.name))

    console.print(table)


@app.command("indicators")
def list_indicators(
    source: Annotated[
        int,
        typer.Option("--source", "-s", help="Source ID (see: wbload sources)"),
    ],
) -> None:
    """List the available indicators of a source."""
    try:
        with get_client() as client:
            indicators = client.list_indicators(source)
    except WbLoadError as e:
        fail(e)

    table = Table(title=f"Indicators of source {source}")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name")

    for indicator in indicators:
        table.add_row(escape(indicator.id), escape(indicator.name))

    console.print(table)


# =============================================================================
# SHOW
# =============================================================================


@app.command("show")
def show_table(
    name: Annotated[str, typer.Argument(help="Table to display")],
    database: Annotated[
        Path,
        typer.Option("--database", "-d", exists=True, dir_okay=False, help="DuckDB database file"),
    ],
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", min=1, help="Max rows"),
    ] = 20,
) -> None:
    """Print the first rows of a downloaded table."""
    try:
        with connection_scope(database) as conn:
            df = read_table(conn, name, limit=limit)
    except WbLoadError as e:
        fail(e)

    table = Table(title=escape(name))
    for column in df.columns:
        table.add_column(str(column), justify="left" if column in ("name", "iso3") else "right")

    for row in df.itertuples(index=False):
        table.add_row(*[_format_cell(v) for v in row])

    console.print(table)


def _format_cell(value: object) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    if isinstance(value, float):
        return f"{value:,.2f}"
    return escape(str(value))


if __name__ == "__main__":
    app()
