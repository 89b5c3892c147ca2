"""Domain services."""

from .value_mapper import (
    ValueFormatError,
    ValueMapper,
    format_value,
    make_value_formatter,
    make_value_mapper,
    map_columns,
    parse_date,
    parse_number,
)

__all__ = [
    "ValueFormatError",
    "ValueMapper",
    "format_value",
    "make_value_formatter",
    "make_value_mapper",
    "map_columns",
    "parse_date",
    "parse_number",
]
