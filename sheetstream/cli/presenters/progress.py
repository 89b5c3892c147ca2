from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console

    from ...domain.entities.scalars import Row


class BatchProgressPresenter:
    """Batch sink that reports each delivered batch to the console."""

    def __init__(self, console: Console, *, quiet: bool = False) -> None:
        super().__init__()
        self.console = console
        self.quiet = quiet
        self.batch_sizes: list[int] = []

    def __call__(self, batch: list[Row]) -> None:
        self.batch_sizes.append(len(batch))
        if not self.quiet:
            self.print_progress_line()

    @property
    def total_rows(self) -> int:
        return sum(self.batch_sizes)

    @property
    def batch_count(self) -> int:
        return len(self.batch_sizes)

    def print_progress_line(self) -> None:
        self.console.print(
            f"[dim]Batch {self.batch_count}: {self.batch_sizes[-1]:,} rows "
            f"({self.total_rows:,} total)[/dim]"
        )

    def print_summary(self) -> None:
        self.console.print("\n[bold]Batches:[/bold]")
        self.console.print(f"  Delivered: {self.batch_count}")
        self.console.print(f"  [green]Rows: {self.total_rows:,}[/green]")
        if self.batch_sizes:
            self.console.print(f"  Largest batch: {max(self.batch_sizes):,}")
