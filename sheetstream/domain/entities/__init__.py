"""Domain entities: scalar cell values, rows and tables."""

from .scalars import (
    ERROR_VALUES,
    ErrorValue,
    InverseValueMap,
    Row,
    Scalar,
    Table,
    ValueMap,
    scalar_type_name,
)

__all__ = [
    "ERROR_VALUES",
    "ErrorValue",
    "InverseValueMap",
    "Row",
    "Scalar",
    "Table",
    "ValueMap",
    "scalar_type_name",
]
