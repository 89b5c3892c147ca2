from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing_extensions import override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    source_name: str = ""
    sheet_name: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "sources_read": 0,
            "rows_read": 0,
            "batches_delivered": 0,
            "rows_written": 0,
            "warnings": 0,
            "errors": 0,
        }

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_read_start(self, source_name: str, sheet_name: str | None) -> None:
        self.set_context(source_name=source_name, sheet_name=sheet_name or "")
        self.verbose(f"Reading {source_name}")
        if sheet_name:
            self.debug(f"  Sheet bucket: {sheet_name}")

    @override
    def log_read_complete(
        self, source_name: str, row_count: int, line_count: int
    ) -> None:
        self._stats["sources_read"] += 1
        self._stats["rows_read"] += row_count
        msg = f"  Loaded {row_count:,} rows from {source_name}"
        if self.verbosity >= LogLevel.DEBUG:
            msg += f" ({line_count:,} lines)"
        self.verbose(msg)

    @override
    def log_batch_delivered(self, batch_number: int, batch_size: int) -> None:
        self._stats["batches_delivered"] += 1
        self.debug(f"  Batch {batch_number}: {batch_size:,} rows")

    @override
    def log_write_complete(
        self, destination_name: str, sheet_count: int, row_count: int
    ) -> None:
        self._stats["rows_written"] += row_count
        self.verbose(
            f"Wrote {row_count:,} rows from {sheet_count} sheet(s) to {destination_name}"
        )

    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Processing Statistics:[/dim]")
            self.console.print(f"[dim]  Sources read: {self._stats['sources_read']}[/dim]")
            self.console.print(f"[dim]  Rows read: {self._stats['rows_read']:,}[/dim]")
            self.console.print(
                f"[dim]  Rows written: {self._stats['rows_written']:,}[/dim]"
            )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        for key in self._stats:
            self._stats[key] = 0

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.source_name:
            parts.append(self._context.source_name)
        if self._context.sheet_name:
            parts.append(self._context.sheet_name)
        return escape(f"[{':'.join(parts)}] ") if parts else ""
