"""Workbook adapters consumed by ``TableWriter``.

Each sheet yields rows whose first value is a row-number pseudo-column,
the way spreadsheet libraries expose ``row.values``. Writers drop it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ...domain.entities.scalars import Row, Table


@dataclass(slots=True)
class TableSheet:
    name: str | None
    rows: Sequence[Sequence[object]]

    def iter_rows(self) -> Iterator[list[object]]:
        for number, row in enumerate(self.rows, start=1):
            yield [number, *row]


class TableWorkbook:
    pass

    def __init__(self, table: Mapping[str | None, Sequence[Sequence[object]]]) -> None:
        super().__init__()
        self._sheets = [TableSheet(name, rows) for name, rows in table.items()]

    def iter_sheets(self) -> Iterator[TableSheet]:
        yield from self._sheets


@dataclass(slots=True)
class DataFrameSheet:
    name: str | None
    frame: pd.DataFrame

    def iter_rows(self) -> Iterator[tuple[object, ...]]:
        for record in self.frame.itertuples(index=True, name=None):
            yield tuple(_from_pandas(value) for value in record)


class DataFrameWorkbook:
    """Sheets backed by pandas DataFrames; the frame index is the row number."""

    def __init__(self, frames: Mapping[str | None, pd.DataFrame]) -> None:
        super().__init__()
        self._sheets = [DataFrameSheet(name, frame) for name, frame in frames.items()]

    def iter_sheets(self) -> Iterator[DataFrameSheet]:
        yield from self._sheets


def table_to_frames(
    table: Table, columns: Sequence[str] | None = None
) -> dict[str | None, pd.DataFrame]:
    frames: dict[str | None, pd.DataFrame] = {}
    for sheet_name, rows in table.items():
        width = max((len(row) for row in rows), default=0)
        names = list(columns) if columns else [f"column_{i + 1}" for i in range(width)]
        padded: list[Row] = [row + [None] * (len(names) - len(row)) for row in rows]
        frames[sheet_name] = pd.DataFrame(padded, columns=names, dtype=object)
    return frames


def _from_pandas(value: object) -> object:
    if value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value
