"""
Canonical column types understood by frametype.

The set is closed: every field shape maps to exactly one ColumnType, and only the
DateTime kind carries an extra attribute (an optional time zone). Engine adapters
(frametype.frames.dtypes) translate these to and from concrete dtypes.

Notes:
    - TypeKind values are lower_snake; `str(ColumnType)` gives the display name used in
      error messages (e.g. "Int32", "DateTime(UTC)").
    - Zero-IO; stdlib only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "TypeKind",
    "ColumnType",
    "datetime_type",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "FLOAT32",
    "FLOAT64",
    "BOOLEAN",
    "STRING",
    "DATE",
    "DATETIME",
    "DATETIME_UTC",
    "TIME",
]


class TypeKind(Enum):
    """Closed enumeration of column type families."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    STRING = "string"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"


_DISPLAY: dict[TypeKind, str] = {
    TypeKind.INT8: "Int8",
    TypeKind.INT16: "Int16",
    TypeKind.INT32: "Int32",
    TypeKind.INT64: "Int64",
    TypeKind.UINT8: "UInt8",
    TypeKind.UINT16: "UInt16",
    TypeKind.UINT32: "UInt32",
    TypeKind.UINT64: "UInt64",
    TypeKind.FLOAT32: "Float32",
    TypeKind.FLOAT64: "Float64",
    TypeKind.BOOLEAN: "Boolean",
    TypeKind.STRING: "String",
    TypeKind.DATE: "Date",
    TypeKind.DATETIME: "DateTime",
    TypeKind.TIME: "Time",
}


@dataclass(frozen=True)
class ColumnType:
    """
    Canonical type of one column.

    Attributes:
        kind (TypeKind): Type family.
        time_zone (str | None): Zone tag; only meaningful (and only allowed) for DateTime.

    Raises:
        ValueError: If a zone is given for a non-DateTime kind.

    Examples:
        >>> from frametype.core.dtypes import INT32, datetime_type
        >>> str(INT32)
        'Int32'
        >>> str(datetime_type("UTC"))
        'DateTime(UTC)'
    """

    kind: TypeKind
    time_zone: str | None = None

    def __post_init__(self) -> None:
        if self.time_zone is not None and self.kind is not TypeKind.DATETIME:
            raise ValueError(f"time_zone is only valid for DateTime columns, got {self.kind.value}")

    def __str__(self) -> str:
        name = _DISPLAY[self.kind]
        if self.time_zone is not None:
            return f"{name}({self.time_zone})"
        return name


def datetime_type(time_zone: str | None = None) -> ColumnType:
    """Build a DateTime column type, optionally zoned."""
    return ColumnType(TypeKind.DATETIME, time_zone)


INT8 = ColumnType(TypeKind.INT8)
INT16 = ColumnType(TypeKind.INT16)
INT32 = ColumnType(TypeKind.INT32)
INT64 = ColumnType(TypeKind.INT64)
UINT8 = ColumnType(TypeKind.UINT8)
UINT16 = ColumnType(TypeKind.UINT16)
UINT32 = ColumnType(TypeKind.UINT32)
UINT64 = ColumnType(TypeKind.UINT64)
FLOAT32 = ColumnType(TypeKind.FLOAT32)
FLOAT64 = ColumnType(TypeKind.FLOAT64)
BOOLEAN = ColumnType(TypeKind.BOOLEAN)
STRING = ColumnType(TypeKind.STRING)
DATE = ColumnType(TypeKind.DATE)
DATETIME = datetime_type()
DATETIME_UTC = datetime_type("UTC")
TIME = ColumnType(TypeKind.TIME)
