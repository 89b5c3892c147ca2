"""Unit tests for TableWriter."""

import csv
from datetime import UTC, datetime
import io
from pathlib import Path

import pandas as pd
import pytest

from sheetstream.domain.entities.scalars import ErrorValue
from sheetstream.infrastructure.io.exceptions import RecordFormatError, StreamError
from sheetstream.infrastructure.io.table_writer import TableWriter, WriteOptions
from sheetstream.infrastructure.io.workbook import DataFrameWorkbook, TableWorkbook
from sheetstream.infrastructure.logging.null_logger import NullLogger


class BrokenDestination(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError("no space left on device")


class RecordingLogger(NullLogger):
    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, int, int]] = []

    def log_write_complete(
        self, destination_name: str, sheet_count: int, row_count: int
    ) -> None:
        self.writes.append((destination_name, sheet_count, row_count))


def writer_for(table: dict) -> TableWriter:
    return TableWriter(TableWorkbook(table))


class TestTableWriter:
    """Test suite for TableWriter.write."""

    def test_write_buffer_formats_scalars(self):
        """Typed values are rendered through the inverse mapper."""
        # Arrange
        writer = writer_for({None: [["a", 1, True, None, ErrorValue("#DIV/0!"), 2.5]]})

        # Act
        data = writer.write_buffer()

        # Assert
        assert data == b"a,1,true,,#DIV/0!,2.5\n"

    def test_sheets_and_rows_in_order(self):
        writer = writer_for({"first": [[1], [2]], "second": [[3]]})

        assert writer.write_buffer() == b"1\n2\n3\n"

    def test_row_number_column_is_dropped(self):
        """Only the values after the row-number pseudo-column are written."""
        frame = pd.DataFrame({"name": ["ada", "bob"], "score": [10, 7]}, index=[5, 9])
        writer = TableWriter(DataFrameWorkbook({"scores": frame}))

        assert writer.write_buffer() == b"ada,10\nbob,7\n"

    def test_date_format_option(self):
        writer = writer_for({None: [[datetime(2024, 1, 15)]]})

        data = writer.write_buffer(WriteOptions(date_format="%m-%d-%Y"))

        assert data == b"01-15-2024\n"

    def test_dates_default_to_iso(self):
        writer = writer_for({None: [[datetime(2024, 1, 15, 10, 30, tzinfo=UTC)]]})

        assert writer.write_buffer() == b"2024-01-15T10:30:00+00:00\n"

    def test_custom_map(self):
        """A caller map replaces the default inverse mapping."""
        writer = writer_for({None: [[1, None]]})

        data = writer.write_buffer(WriteOptions(map=lambda value: f"<{value}>"))

        assert data == b"<1>,<None>\n"

    def test_column_mappers(self):
        writer = writer_for({None: [[10, 20]]})

        data = writer.write_buffer(WriteOptions(columns=[None, lambda v: v * 2]))

        assert data == b"10,40\n"

    def test_fields_are_quoted_when_needed(self):
        writer = writer_for({None: [["x, y", 'say "hi"']]})

        assert writer.write_buffer() == b'"x, y","say ""hi"""\n'

    def test_formatter_options(self):
        writer = writer_for({None: [["a", "b"]]})

        data = writer.write_buffer(
            WriteOptions(formatter_options={"delimiter": ";", "lineterminator": "\r\n"})
        )

        assert data == b"a;b\r\n"

    def test_write_buffer_encoding(self):
        writer = writer_for({None: [["café"]]})

        data = writer.write_buffer(WriteOptions(encoding="latin-1"))

        assert data == "café\n".encode("latin-1")

    def test_text_destination_left_open(self):
        destination = io.StringIO()

        writer_for({None: [["a"]]}).write(destination)

        assert not destination.closed
        assert destination.getvalue() == "a\n"

    def test_binary_destination_left_open(self):
        """Binary destinations are wrapped for writing and handed back open."""
        destination = io.BytesIO()

        writer_for({None: [["a"]]}).write(destination)

        assert not destination.closed
        assert destination.getvalue() == b"a\n"

    def test_non_finite_number_is_format_error(self):
        writer = writer_for({"s": [[1], [float("inf")]]})

        with pytest.raises(RecordFormatError, match="row 2 of sheet 's'"):
            writer.write_buffer()

    def test_formatter_rejection_is_format_error(self):
        """csv.writer refusing a value surfaces as RecordFormatError."""
        writer = writer_for({None: [["needs, escaping"]]})
        options = WriteOptions(formatter_options={"quoting": csv.QUOTE_NONE})

        with pytest.raises(RecordFormatError):
            writer.write_buffer(options)

    def test_destination_failure_is_stream_error(self):
        with pytest.raises(StreamError, match="no space left"):
            writer_for({None: [["a"]]}).write(BrokenDestination())

    def test_logger_receives_counts(self):
        logger = RecordingLogger()
        writer = TableWriter(TableWorkbook({"a": [[1]], "b": [[2], [3]]}), logger=logger)

        writer.write(io.StringIO())

        assert logger.writes == [("StringIO", 2, 3)]


class TestWriteFile:
    def test_write_file(self, tmp_path: Path):
        target = tmp_path / "out.csv"

        writer_for({None: [["name", "score"], ["ada", 10]]}).write_file(target)

        assert target.read_text(encoding="utf-8") == "name,score\nada,10\n"

    def test_write_file_missing_directory(self, tmp_path: Path):
        target = tmp_path / "missing" / "out.csv"

        with pytest.raises(StreamError, match="Failed to open"):
            writer_for({None: [["a"]]}).write_file(target)
