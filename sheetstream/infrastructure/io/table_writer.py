from __future__ import annotations

import csv
from dataclasses import dataclass, field
import io
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from ...constants import Defaults
from ...domain.services.value_mapper import (
    ValueFormatError,
    make_value_formatter,
    map_columns,
)
from ..logging.null_logger import NullLogger
from .exceptions import RecordFormatError, StreamError
from .utils import describe_stream

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ...application.ports.services import LoggerPort, WorkbookPort
    from ...config import SheetStreamConfig
    from ...domain.entities.scalars import InverseValueMap

DEFAULT_FORMATTER_OPTIONS: dict[str, Any] = {"lineterminator": "\n"}


@dataclass(slots=True)
class WriteOptions:
    date_format: str | None = None
    date_utc: bool = False
    map: InverseValueMap | None = None
    columns: Sequence[Callable[[object], object] | None] | None = None
    formatter_options: dict[str, Any] = field(default_factory=dict)
    encoding: str = Defaults.ENCODING

    @classmethod
    def from_config(cls, config: SheetStreamConfig, **overrides: Any) -> WriteOptions:
        values: dict[str, Any] = {"encoding": config.encoding}
        values.update(overrides)
        return cls(**values)


class TableWriter:
    pass

    def __init__(self, workbook: WorkbookPort, logger: LoggerPort | None = None) -> None:
        super().__init__()
        self.workbook = workbook
        self._logger: LoggerPort = logger or NullLogger()

    def write(self, destination: IO[Any], options: WriteOptions | None = None) -> None:
        if options is None:
            options = WriteOptions()
        stream, wrapped = _as_text_stream(destination, options.encoding)
        map_value = options.map or make_value_formatter(
            options.date_format, date_utc=options.date_utc
        )
        map_column = map_columns(options.columns)
        writer = csv.writer(
            stream, **{**DEFAULT_FORMATTER_OPTIONS, **options.formatter_options}
        )
        sheet_count = 0
        row_count = 0
        try:
            for sheet in self.workbook.iter_sheets():
                sheet_count += 1
                for row_number, row in enumerate(sheet.iter_rows(), start=1):
                    values = list(row)[1:]
                    try:
                        record = [
                            map_value(map_column(value, index))
                            for index, value in enumerate(values)
                        ]
                        writer.writerow(record)
                    except (ValueFormatError, csv.Error) as e:
                        raise RecordFormatError(
                            f"Cannot format row {row_number} of sheet "
                            f"{sheet.name!r}: {e}"
                        ) from e
                    row_count += 1
            stream.flush()
        except OSError as e:
            raise StreamError(
                f"Failed to write to {describe_stream(destination)}: {e}"
            ) from e
        finally:
            if wrapped:
                _release(stream)
        self._logger.log_write_complete(
            describe_stream(destination), sheet_count, row_count
        )

    def write_file(self, path: Path | str, options: WriteOptions | None = None) -> None:
        if options is None:
            options = WriteOptions()
        path = Path(path)
        try:
            handle = path.open("w", encoding=options.encoding, newline="")
        except OSError as e:
            raise StreamError(f"Failed to open {path} for writing: {e}") from e
        with handle:
            self.write(handle, options)

    def write_buffer(self, options: WriteOptions | None = None) -> bytes:
        buffer = io.BytesIO()
        self.write(buffer, options)
        return buffer.getvalue()


def _as_text_stream(destination: IO[Any], encoding: str) -> tuple[IO[str], bool]:
    if isinstance(destination, io.TextIOBase):
        return destination, False
    wrapper = io.TextIOWrapper(destination, encoding=encoding, newline="")
    return wrapper, True


def _release(stream: IO[str]) -> None:
    if isinstance(stream, io.TextIOWrapper) and not stream.closed:
        stream.detach()
