from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table as RichTable

from ...domain.entities.scalars import scalar_type_name
from ...domain.services.value_mapper import format_value

if TYPE_CHECKING:
    from rich.console import Console

    from ...domain.entities.scalars import Scalar, Table

TYPE_STYLES: dict[str, str] = {
    "null": "dim",
    "number": "cyan",
    "date": "magenta",
    "boolean": "yellow",
    "error": "red",
    "string": "",
}


class RowsPresenter:
    pass

    def __init__(self, console: Console, *, limit: int | None = None) -> None:
        super().__init__()
        self.console = console
        self.limit = limit

    def render(self, table: Table) -> None:
        for sheet_name, rows in table.items():
            self.console.print(self.build_table(sheet_name, rows))
            if self.limit is not None and len(rows) > self.limit:
                self.console.print(
                    f"[dim]... {len(rows) - self.limit:,} more rows not shown[/dim]"
                )
        if not table:
            self.console.print("[yellow]⚠[/yellow] No rows found")

    def build_table(self, sheet_name: str | None, rows: list[list[Scalar]]) -> RichTable:
        title = f"Sheet: {sheet_name}" if sheet_name else "Rows"
        width = max((len(row) for row in rows), default=0)
        table = RichTable(title=title)
        table.add_column("#", style="dim", justify="right")
        for index in range(width):
            table.add_column(f"column_{index + 1}")
        shown = rows if self.limit is None else rows[: self.limit]
        for number, row in enumerate(shown, start=1):
            cells = [self.format_cell(value) for value in row]
            cells.extend("" for _ in range(width - len(row)))
            table.add_row(str(number), *cells)
        return table

    @staticmethod
    def format_cell(value: Scalar) -> str:
        kind = scalar_type_name(value)
        text = "null" if value is None else escape(format_value(value))
        style = TYPE_STYLES[kind]
        if style:
            return f"[{style}]{text}[/{style}]"
        return text
