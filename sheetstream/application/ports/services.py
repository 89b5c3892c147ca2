from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ...domain.entities.scalars import Row


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_read_start(self, source_name: str, sheet_name: str | None) -> None: ...

    def log_read_complete(
        self, source_name: str, row_count: int, line_count: int
    ) -> None: ...

    def log_batch_delivered(self, batch_number: int, batch_size: int) -> None: ...

    def log_write_complete(
        self, destination_name: str, sheet_count: int, row_count: int
    ) -> None: ...


@runtime_checkable
class WorksheetPort(Protocol):
    """One sheet of a workbook.

    ``iter_rows`` yields value sequences whose first element is the row
    number pseudo-column; writers skip it.
    """

    @property
    def name(self) -> str | None: ...

    def iter_rows(self) -> Iterable[Sequence[object]]: ...


@runtime_checkable
class WorkbookPort(Protocol):
    pass

    def iter_sheets(self) -> Iterable[WorksheetPort]: ...


@runtime_checkable
class BatchSinkPort(Protocol):
    pass

    def __call__(self, batch: list[Row]) -> None: ...
