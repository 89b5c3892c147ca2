"""Field value coercion between CSV text and typed scalars.

``map_value`` turns a raw field into a ``Scalar`` using a closed decision
table; the first rule that matches wins:

1. empty string -> ``None``
2. whole token is a finite decimal number -> ``int`` or ``float``
3. token strictly matches a configured date format -> ``datetime``
4. ``"true"`` / ``"false"`` -> ``bool``
5. one of the seven spreadsheet error codes -> ``ErrorValue``
6. anything else -> the token unchanged

``format_value`` is the inverse used when writing.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, date, datetime
import math
import re
from typing import TYPE_CHECKING

from ...constants import Defaults, Patterns, SpecialValues
from ..entities.scalars import ERROR_VALUES, ErrorValue

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..entities.scalars import InverseValueMap, Scalar, ValueMap

_DECIMAL_RE = re.compile(Patterns.DECIMAL_NUMBER)
_INTEGER_RE = re.compile(Patterns.INTEGER_NUMBER)
_TZ_COLON_RE = re.compile(Patterns.TZ_COLON_SUFFIX)

_BOOLEANS: dict[str, bool] = {SpecialValues.TRUE: True, SpecialValues.FALSE: False}


class ValueFormatError(ValueError):
    pass


def parse_number(token: str) -> int | float | None:
    """Parse ``token`` as a number only if the whole token is numeric.

    Only plain decimal notation is accepted. Surrounding whitespace, hex
    literals (``0x1A``) and ``NaN`` / ``Infinity`` spellings stay strings, so
    ``" 42 "`` is not the number 42. Tokens that overflow to infinity are
    rejected as well.
    """
    if not _DECIMAL_RE.fullmatch(token):
        return None
    if _INTEGER_RE.fullmatch(token):
        return int(token)
    number = float(token)
    if not math.isfinite(number):
        return None
    return number


def _normalize_tz_suffix(token: str) -> str:
    if token.endswith("Z"):
        return token[:-1] + "+0000"
    return _TZ_COLON_RE.sub(r"\1\2", token)


def parse_date(token: str, date_format: str) -> datetime | None:
    """Strictly parse ``token`` with ``date_format``.

    ``strptime`` alone accepts unpadded fields (``1-5-2024`` for
    ``%m-%d-%Y``), so the parsed value must also format back to the token.
    """
    try:
        parsed = datetime.strptime(token, date_format)
    except ValueError:
        return None
    expected = token
    if "%z" in date_format:
        expected = _normalize_tz_suffix(token)
    if parsed.strftime(date_format) != expected:
        return None
    return parsed


class ValueMapper:
    pass

    def __init__(self, date_formats: Sequence[str] | None = None) -> None:
        super().__init__()
        self.date_formats: tuple[str, ...] = (
            tuple(date_formats) if date_formats else Defaults.DATE_FORMATS
        )

    def __call__(self, raw: str) -> Scalar:
        return self.map_value(raw)

    def map_value(self, raw: str) -> Scalar:
        if raw == "":
            return None
        number = parse_number(raw)
        if number is not None:
            return number
        for date_format in self.date_formats:
            parsed = parse_date(raw, date_format)
            if parsed is not None:
                return parsed
        if raw in _BOOLEANS:
            return _BOOLEANS[raw]
        error = ERROR_VALUES.get(raw)
        if error is not None:
            return error
        return raw


def make_value_mapper(date_formats: Sequence[str] | None = None) -> ValueMap:
    return ValueMapper(date_formats).map_value


def format_value(
    value: Scalar | date,
    *,
    date_format: str | None = None,
    date_utc: bool = False,
) -> str:
    """Render a scalar as CSV field text.

    Args:
        value: Typed cell value.
        date_format: ``strftime`` pattern for datetimes; ISO 8601 when omitted.
        date_utc: Convert timezone-aware datetimes to UTC before formatting.

    Raises:
        ValueFormatError: For non-finite floats, which have no CSV form that
            reads back as a number.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return SpecialValues.TRUE if value else SpecialValues.FALSE
    if isinstance(value, ErrorValue):
        return value.error
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueFormatError(f"Cannot write non-finite number {value!r}")
        return repr(value)
    if isinstance(value, datetime):
        if date_utc and value.tzinfo is not None:
            value = value.astimezone(UTC)
        if date_format:
            return value.strftime(date_format)
        return value.isoformat()
    if isinstance(value, date):
        if date_format:
            return value.strftime(date_format)
        return value.isoformat()
    return str(value)


def make_value_formatter(
    date_format: str | None = None, *, date_utc: bool = False
) -> InverseValueMap:
    def _format(value: Scalar) -> str:
        return format_value(value, date_format=date_format, date_utc=date_utc)

    return _format


def map_columns(
    columns: Sequence[Callable[[object], object] | None] | None,
) -> Callable[[object, int], object]:
    """Build a per-column mapper applying ``columns[index]`` when present."""

    def _map(value: object, column_index: int) -> object:
        if columns and column_index < len(columns):
            mapper = columns[column_index]
            if mapper is not None:
                return mapper(value)
        return value

    return _map
