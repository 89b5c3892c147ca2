"""Normalize command - re-write a CSV through the typed read/write pipeline.

Numbers, booleans and error codes are written back in canonical form and
dates are re-rendered with ``--date-format`` (ISO 8601 by default).
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ...config import ConfigLoader
from ...infrastructure.io.exceptions import SheetStreamError
from ...infrastructure.io.table_reader import ReadOptions, TableReader
from ...infrastructure.io.table_writer import TableWriter, WriteOptions
from ...infrastructure.io.workbook import TableWorkbook
from ...infrastructure.logging.console_logger import ConsoleLogger

console = Console()


@click.command()
@click.argument("source", type=click.Path(exists=True, path_type=Path))
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a sheetstream.toml config file (default: ./sheetstream.toml)",
)
@click.option(
    "--read-date-format",
    "read_date_formats",
    multiple=True,
    help="strptime pattern used to recognise dates; repeat to give several",
)
@click.option("--date-format", default=None, help="strftime pattern for dates")
@click.option("--date-utc", is_flag=True, help="Convert aware dates to UTC")
@click.option("-v", "--verbose", count=True, help="Increase output verbosity")
def normalize_command(
    source: Path,
    destination: Path,
    config_file: Path | None,
    read_date_formats: tuple[str, ...],
    date_format: str | None,
    date_utc: bool,
    verbose: int,
) -> None:
    """Read SOURCE and write the typed rows to DESTINATION."""
    config = ConfigLoader.load(config_file)
    logger = ConsoleLogger(console=console, verbosity=verbose)
    read_overrides: dict[str, object] = {}
    if read_date_formats:
        read_overrides["date_formats"] = read_date_formats
    read_options = ReadOptions.from_config(config, **read_overrides)
    write_options = WriteOptions.from_config(
        config, date_format=date_format, date_utc=date_utc
    )
    try:
        table = TableReader(logger=logger).read_file(source, read_options)
        TableWriter(TableWorkbook(table), logger=logger).write_file(
            destination, write_options
        )
    except SheetStreamError as e:
        raise click.ClickException(str(e)) from e
    row_count = sum(len(rows) for rows in table.values())
    logger.success(f"Wrote {row_count:,} rows to {destination}")
    logger.log_final_stats()
