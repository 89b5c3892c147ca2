"""Infrastructure I/O layer.

Line scanning, typed CSV reading and writing, batching and workbook adapters.

Architecture note:
- Internal modules import from the defining modules to avoid cycles.
"""

from .batch_processor import BatchProcessor
from .exceptions import (
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    DataValidationError,
    RecordFormatError,
    ScannerSignalError,
    SheetStreamError,
    StreamError,
)
from .line_scanner import (
    LineScanner,
    LineScannerOptions,
    ScannerSignal,
    ScannerState,
    ScannerStats,
)
from .table_reader import ReadOptions, TableReader
from .table_writer import TableWriter, WriteOptions
from .workbook import DataFrameWorkbook, TableWorkbook, table_to_frames

__all__ = [
    "BatchProcessor",
    "DataFrameWorkbook",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataValidationError",
    "LineScanner",
    "LineScannerOptions",
    "ReadOptions",
    "RecordFormatError",
    "ScannerSignal",
    "ScannerSignalError",
    "ScannerState",
    "ScannerStats",
    "SheetStreamError",
    "StreamError",
    "TableReader",
    "TableWorkbook",
    "TableWriter",
    "WriteOptions",
    "table_to_frames",
]
