"""sheetstream package.

Streaming line scanning and typed CSV reading/writing.

Features:
- Incremental line scanner with cork/uncork and pause/resume flow control
- Value inference for numbers, dates, booleans and spreadsheet error codes
- Table reader/writer over file-like objects, files and in-memory buffers
- Bounded-memory batch delivery for large inputs
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("sheetstream")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from sheetstream.domain.entities.scalars import ErrorValue
from sheetstream.domain.services.value_mapper import ValueMapper, format_value
from sheetstream.infrastructure.io.batch_processor import BatchProcessor
from sheetstream.infrastructure.io.line_scanner import LineScanner
from sheetstream.infrastructure.io.table_reader import ReadOptions, TableReader
from sheetstream.infrastructure.io.table_writer import TableWriter, WriteOptions

__all__ = [
    "BatchProcessor",
    "ErrorValue",
    "LineScanner",
    "ReadOptions",
    "TableReader",
    "TableWriter",
    "ValueMapper",
    "WriteOptions",
    "__version__",
    "format_value",
]
