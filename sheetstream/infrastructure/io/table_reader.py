from __future__ import annotations

from collections import deque
from contextlib import contextmanager
import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import pandas as pd

from ...constants import Defaults
from ...domain.services.value_mapper import make_value_mapper
from ..logging.null_logger import NullLogger
from .batch_processor import BatchProcessor
from .exceptions import (
    DataParseError,
    DataSourceNotFoundError,
    DataValidationError,
    StreamError,
)
from .line_scanner import LineScanner, LineScannerOptions, ScannerSignal
from .utils import describe_stream
from .workbook import table_to_frames

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    import re

    from ...application.ports.services import BatchSinkPort, LoggerPort
    from ...config import SheetStreamConfig
    from ...domain.entities.scalars import Row, Table, ValueMap
    from .exceptions import ScannerSignalError


@dataclass(slots=True)
class ReadOptions:
    sheet_name: str | None = None
    date_formats: tuple[str, ...] | None = None
    map: ValueMap | None = None
    parser_options: dict[str, Any] = field(default_factory=dict)
    expected_columns: int | None = None
    ignore_empty: bool = True
    encoding: str = Defaults.ENCODING
    chunk_size: int = Defaults.CHUNK_SIZE
    batch_size: int = Defaults.BATCH_SIZE
    max_buffer_size: int = Defaults.MAX_BUFFER_SIZE
    max_line_count: int | None = None
    flush_line_count: int | None = None
    line_delimiter: str | re.Pattern[str] = Defaults.LINE_DELIMITER
    transform: Callable[[str], str] | None = None
    progress_callback: Callable[[int], None] | None = None

    @classmethod
    def from_config(cls, config: SheetStreamConfig, **overrides: Any) -> ReadOptions:
        values: dict[str, Any] = {
            "sheet_name": config.sheet_name,
            "date_formats": config.date_formats,
            "encoding": config.encoding,
            "chunk_size": config.chunk_size,
            "batch_size": config.batch_size,
            "max_buffer_size": config.max_buffer_size,
            "max_line_count": config.max_line_count,
            "flush_line_count": config.flush_line_count,
        }
        values.update(overrides)
        return cls(**values)

    def scanner_options(self, logger: LoggerPort | None = None) -> LineScannerOptions:
        return LineScannerOptions(
            encoding=self.encoding,
            max_buffer_size=self.max_buffer_size,
            max_line_count=self.max_line_count,
            flush_line_count=self.flush_line_count,
            line_delimiter=self.line_delimiter,
            transform=self.transform,
            progress_callback=self.progress_callback,
            logger=logger,
        )


class TableReader:
    pass

    def __init__(self, logger: LoggerPort | None = None) -> None:
        super().__init__()
        self._logger: LoggerPort = logger or NullLogger()

    def read(self, source: IO[Any], options: ReadOptions | None = None) -> Table:
        if options is None:
            options = ReadOptions()
        source_name = describe_stream(source)
        self._logger.log_read_start(source_name, options.sheet_name)
        scanner = self._create_scanner(options)
        table: Table = {}
        row_count = 0
        for row in self._iter_rows(source, scanner, options):
            table.setdefault(options.sheet_name, []).append(row)
            row_count += 1
        self._logger.log_read_complete(source_name, row_count, scanner.line_count)
        return table

    def read_file(self, path: Path | str, options: ReadOptions | None = None) -> Table:
        with _open_source(Path(path)) as handle:
            return self.read(handle, options)

    def read_frame(
        self,
        source: IO[Any],
        options: ReadOptions | None = None,
        *,
        header: bool = True,
    ) -> pd.DataFrame:
        if options is None:
            options = ReadOptions()
        rows = self.read(source, options).get(options.sheet_name, [])
        columns: list[str] | None = None
        if header and rows:
            columns = ["" if value is None else str(value) for value in rows[0]]
            rows = rows[1:]
        frames = table_to_frames({options.sheet_name: rows}, columns)
        return frames[options.sheet_name]

    def iter_rows(
        self, source: IO[Any], options: ReadOptions | None = None
    ) -> Iterator[Row]:
        if options is None:
            options = ReadOptions()
        yield from self._iter_rows(source, self._create_scanner(options), options)

    def stream(
        self,
        source: IO[Any],
        sink: BatchSinkPort,
        options: ReadOptions | None = None,
    ) -> int:
        if options is None:
            options = ReadOptions()
        source_name = describe_stream(source)
        self._logger.log_read_start(source_name, options.sheet_name)
        scanner = self._create_scanner(options)
        processor = BatchProcessor(sink, options.batch_size, self._logger)
        processor.extend(self._iter_rows(source, scanner, options))
        processor.finish()
        self._logger.log_read_complete(
            source_name, processor.rows_processed, scanner.line_count
        )
        return processor.rows_processed

    def stream_file(
        self,
        path: Path | str,
        sink: BatchSinkPort,
        options: ReadOptions | None = None,
    ) -> int:
        with _open_source(Path(path)) as handle:
            return self.stream(handle, sink, options)

    def _create_scanner(self, options: ReadOptions) -> LineScanner:
        scanner = LineScanner(options.scanner_options(self._logger))
        scanner.on(ScannerSignal.ERROR, _raise_scanner_error)
        return scanner

    def _iter_rows(
        self, source: IO[Any], scanner: LineScanner, options: ReadOptions
    ) -> Iterator[Row]:
        mapper = options.map or make_value_mapper(options.date_formats)
        records = csv.reader(
            _iter_lines(source, scanner, options.chunk_size),
            **options.parser_options,
        )
        row_number = 0
        while True:
            try:
                record = next(records)
            except StopIteration:
                return
            except csv.Error as e:
                raise DataParseError(
                    f"Failed to parse record near line {records.line_num}: {e}"
                ) from e
            if not record and options.ignore_empty:
                continue
            row_number += 1
            if (
                options.expected_columns is not None
                and len(record) != options.expected_columns
            ):
                raise DataValidationError(
                    f"Malformed data row {row_number}: Expected "
                    f"{options.expected_columns} columns, but got {len(record)}"
                )
            yield [mapper(value) for value in record]


def _iter_lines(
    source: IO[Any], scanner: LineScanner, chunk_size: int
) -> Iterator[str]:
    lines: deque[str] = deque()

    def collect(line: str) -> None:
        lines.append(line + _line_terminator(scanner.last_delimiter))

    scanner.on(ScannerSignal.LINE, collect)
    try:
        while True:
            try:
                chunk = source.read(chunk_size)
            except OSError as e:
                raise StreamError(
                    f"Failed to read from {describe_stream(source)}: {e}"
                ) from e
            if not chunk:
                scanner.end()
            else:
                scanner.write(chunk)
            while lines:
                yield lines.popleft()
            if not chunk:
                return
    finally:
        scanner.off(ScannerSignal.LINE, collect)


def _line_terminator(delimiter: str) -> str:
    # csv.reader needs each line terminated; line breaks inside quoted
    # fields must come back as they were written.
    if delimiter and not delimiter.strip("\r\n"):
        return delimiter
    return "\n"


def _raise_scanner_error(error: ScannerSignalError) -> None:
    raise DataParseError(str(error)) from error


@contextmanager
def _open_source(path: Path) -> Iterator[IO[bytes]]:
    if not path.exists():
        raise DataSourceNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise DataSourceNotFoundError(f"Not a file: {path}")
    try:
        handle = path.open("rb")
    except FileNotFoundError as e:
        raise DataSourceNotFoundError(f"File not found: {path}") from e
    except OSError as e:
        raise StreamError(f"Failed to open {path}: {e}") from e
    try:
        yield handle
    finally:
        handle.close()
