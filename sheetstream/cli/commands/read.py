"""Read command - load a CSV through the typed pipeline and show its rows."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ...config import ConfigLoader
from ...infrastructure.io.exceptions import SheetStreamError
from ...infrastructure.io.table_reader import ReadOptions, TableReader
from ...infrastructure.logging.console_logger import ConsoleLogger
from ..presenters.rows import RowsPresenter

console = Console()


@click.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a sheetstream.toml config file (default: ./sheetstream.toml)",
)
@click.option("--sheet-name", default=None, help="Sheet key for the rows read")
@click.option(
    "--date-format",
    "date_formats",
    multiple=True,
    help="strptime pattern tried in order; repeat to give several",
)
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=20,
    show_default=True,
    help="Maximum number of rows to display",
)
@click.option("-v", "--verbose", count=True, help="Increase output verbosity")
def read_command(
    csv_file: Path,
    config_file: Path | None,
    sheet_name: str | None,
    date_formats: tuple[str, ...],
    limit: int,
    verbose: int,
) -> None:
    """Read CSV_FILE and print the typed rows."""
    config = ConfigLoader.load(config_file)
    logger = ConsoleLogger(console=console, verbosity=verbose)
    overrides: dict[str, object] = {}
    if sheet_name is not None:
        overrides["sheet_name"] = sheet_name
    if date_formats:
        overrides["date_formats"] = date_formats
    options = ReadOptions.from_config(config, **overrides)
    try:
        table = TableReader(logger=logger).read_file(csv_file, options)
    except SheetStreamError as e:
        raise click.ClickException(str(e)) from e
    RowsPresenter(console, limit=limit).render(table)
    logger.log_final_stats()
