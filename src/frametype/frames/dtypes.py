"""
Bridge between canonical column types and polars dtypes.

Notes
- to_polars() is total over ColumnType; DateTime columns take the configured time unit.
- from_polars() returns None for polars dtypes without a canonical counterpart
  (List, Struct, Categorical, Enum, Decimal, Duration, Binary, Null, Object ...).
- Datetime time units are not part of the canonical type, so from_polars() drops them
  and keeps only the zone.
"""

from __future__ import annotations

from collections.abc import Mapping

import polars as pl

from frametype.core.dtypes import ColumnType, TypeKind, datetime_type

__all__ = [
    "to_polars",
    "from_polars",
    "polars_schema",
    "canonical_schema",
]

# Polars exposes dtype classes (pl.Int64) and instances (pl.Int64()); keep these loosely typed.
_PAIRS: tuple[tuple[TypeKind, object], ...] = (
    (TypeKind.INT8, pl.Int8),
    (TypeKind.INT16, pl.Int16),
    (TypeKind.INT32, pl.Int32),
    (TypeKind.INT64, pl.Int64),
    (TypeKind.UINT8, pl.UInt8),
    (TypeKind.UINT16, pl.UInt16),
    (TypeKind.UINT32, pl.UInt32),
    (TypeKind.UINT64, pl.UInt64),
    (TypeKind.FLOAT32, pl.Float32),
    (TypeKind.FLOAT64, pl.Float64),
    (TypeKind.BOOLEAN, pl.Boolean),
    (TypeKind.STRING, pl.String),
    (TypeKind.DATE, pl.Date),
    (TypeKind.DATETIME, pl.Datetime),
    (TypeKind.TIME, pl.Time),
)

_TO_POLARS: dict[TypeKind, object] = dict(_PAIRS)


def to_polars(dtype: ColumnType, *, time_unit: str = "us") -> pl.DataType:
    """
    Convert a canonical column type to a polars dtype instance.

    Args:
        dtype (ColumnType): Canonical type.
        time_unit (str): Time unit for DateTime columns ("ns", "us" or "ms").

    Returns:
        pl.DataType: Polars dtype instance.
    """
    if dtype.kind is TypeKind.DATETIME:
        return pl.Datetime(time_unit=time_unit, time_zone=dtype.time_zone)  # type: ignore[arg-type]
    return _TO_POLARS[dtype.kind]()  # type: ignore[operator]


def from_polars(dtype: pl.DataType | type[pl.DataType]) -> ColumnType | None:
    """
    Convert a polars dtype (class or instance) to its canonical column type.

    Returns:
        ColumnType | None: None when the dtype has no canonical counterpart.
    """
    base = dtype.base_type()
    if base is pl.Datetime:
        return datetime_type(getattr(dtype, "time_zone", None))
    for kind, polars_cls in _PAIRS:
        if base is polars_cls:
            return ColumnType(kind)
    return None


def polars_schema(columns: Mapping[str, ColumnType], *, time_unit: str = "us") -> pl.Schema:
    """Build an ordered polars Schema from canonical column types."""
    return pl.Schema({name: to_polars(dtype, time_unit=time_unit) for name, dtype in columns.items()})


def canonical_schema(schema: Mapping[str, pl.DataType]) -> dict[str, object]:
    """
    Convert an observed polars schema to canonical types, keeping column order.

    Dtypes without a canonical counterpart are kept as the raw polars dtype, so they never
    compare equal to a ColumnType.
    """
    out: dict[str, object] = {}
    for name, dtype in schema.items():
        canonical = from_polars(dtype)
        out[name] = dtype if canonical is None else canonical
    return out
