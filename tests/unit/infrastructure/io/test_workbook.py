"""Unit tests for workbook adapters."""

from datetime import datetime

import numpy as np
import pandas as pd

from sheetstream.infrastructure.io.workbook import (
    DataFrameWorkbook,
    TableWorkbook,
    table_to_frames,
)


class TestTableWorkbook:
    def test_rows_are_prefixed_with_row_number(self):
        workbook = TableWorkbook({"s": [["a", 1], ["b", 2]]})

        sheets = list(workbook.iter_sheets())

        assert [sheet.name for sheet in sheets] == ["s"]
        assert list(sheets[0].iter_rows()) == [[1, "a", 1], [2, "b", 2]]

    def test_sheet_order_preserved(self):
        workbook = TableWorkbook({"b": [], None: [[1]], "a": [[2]]})

        assert [sheet.name for sheet in workbook.iter_sheets()] == ["b", None, "a"]


class TestDataFrameWorkbook:
    def test_index_becomes_row_number(self):
        frame = pd.DataFrame({"x": ["p", "q"]}, index=[10, 20])

        sheet = next(DataFrameWorkbook({"f": frame}).iter_sheets())

        assert list(sheet.iter_rows()) == [(10, "p"), (20, "q")]

    def test_pandas_values_converted_to_python(self):
        """Missing values and numpy scalars come back as plain Python values."""
        frame = pd.DataFrame(
            {
                "n": pd.Series([np.int64(3), None], dtype=object),
                "f": [1.5, np.nan],
                "t": [pd.Timestamp("2024-01-15"), pd.NaT],
            }
        )

        rows = list(next(DataFrameWorkbook({None: frame}).iter_sheets()).iter_rows())

        assert rows[0] == (0, 3, 1.5, datetime(2024, 1, 15))
        assert type(rows[0][1]) is int
        assert type(rows[0][3]) is datetime
        assert rows[1] == (1, None, None, None)


class TestTableToFrames:
    def test_default_column_names_and_padding(self):
        frames = table_to_frames({None: [["a", 1], ["b"]]})

        frame = frames[None]
        assert list(frame.columns) == ["column_1", "column_2"]
        assert frame.iloc[1].tolist() == ["b", None]

    def test_explicit_columns(self):
        frames = table_to_frames({"s": [["ada", 10]]}, columns=["name", "score"])

        assert frames["s"].to_dict("records") == [{"name": "ada", "score": 10}]

    def test_values_keep_python_types(self):
        frames = table_to_frames({None: [[True, 2]]})

        assert frames[None].dtypes.tolist() == [object, object]
        assert frames[None].iloc[0].tolist() == [True, 2]
