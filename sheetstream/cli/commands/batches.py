from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ...config import ConfigLoader
from ...infrastructure.io.exceptions import SheetStreamError
from ...infrastructure.io.table_reader import ReadOptions, TableReader
from ...infrastructure.logging.console_logger import ConsoleLogger
from ..presenters.progress import BatchProgressPresenter

console = Console()


@click.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a sheetstream.toml config file (default: ./sheetstream.toml)",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Rows per batch (default: from config, 1000)",
)
@click.option("--quiet", is_flag=True, help="Only print the final summary")
@click.option("-v", "--verbose", count=True, help="Increase output verbosity")
def batches_command(
    csv_file: Path,
    config_file: Path | None,
    batch_size: int | None,
    quiet: bool,
    verbose: int,
) -> None:
    """Stream CSV_FILE in bounded batches and report each batch."""
    config = ConfigLoader.load(config_file)
    logger = ConsoleLogger(console=console, verbosity=verbose)
    overrides: dict[str, object] = {}
    if batch_size is not None:
        overrides["batch_size"] = batch_size
    options = ReadOptions.from_config(config, **overrides)
    presenter = BatchProgressPresenter(console, quiet=quiet)
    try:
        TableReader(logger=logger).stream_file(csv_file, presenter, options)
    except SheetStreamError as e:
        raise click.ClickException(str(e)) from e
    presenter.print_summary()
