"""Typed cell values produced by the value mapper.

A ``Scalar`` is one of ``None``, ``int``, ``float``, ``datetime``, ``bool``,
``ErrorValue`` or ``str``. Rows are plain lists of scalars and a ``Table``
maps a sheet key to its ordered rows.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ...constants import SpecialValues


@dataclass(frozen=True, slots=True)
class ErrorValue:
    """Spreadsheet error sentinel such as ``#DIV/0!``."""

    error: str

    def __post_init__(self) -> None:
        if self.error not in SpecialValues.ERROR_CODES:
            raise ValueError(
                f"Unknown error code {self.error!r}; expected one of "
                f"{', '.join(SpecialValues.ERROR_CODES)}"
            )

    def __str__(self) -> str:
        return self.error


Scalar = bool | int | float | datetime | ErrorValue | str | None
Row = list[Scalar]
Table = dict[str | None, list[Row]]
ValueMap = Callable[[str], Scalar]
InverseValueMap = Callable[[Scalar], object]

ERROR_VALUES: dict[str, ErrorValue] = {
    code: ErrorValue(code) for code in SpecialValues.ERROR_CODES
}


def scalar_type_name(value: Scalar) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, datetime):
        return "date"
    if isinstance(value, ErrorValue):
        return "error"
    return "string"
