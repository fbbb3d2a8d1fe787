"""
Type mapper: declared field shape -> canonical column type.

A field shape is whatever a record class declares for a field: a builtin (`int`, `str`),
a width alias from frametype.core.typing, a datetime class, an enum-capable class, any of
those wrapped once in `X | None` / `Optional[X]`, or an explicit FieldShape.

Notes:
    - Optional wrapping is carried as a flag next to the base type and stripped before the
      lookup; it never changes the column type.
    - Exactly one optional level is allowed. A second one is a malformed shape.
    - The mapping is pure and total over the supported shapes; everything else raises
      UnsupportedType.

Examples:
    >>> from datetime import datetime
    >>> from frametype.core.mapping import map_type
    >>> from frametype.core.typing import Int32
    >>> str(map_type(Int32 | None))
    'Int32'
    >>> str(map_type(datetime))
    'DateTime'
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Annotated, Any, Union, get_args, get_origin

from . import dtypes
from . import typing as ft
from .dtypes import ColumnType
from .enums import is_enum_type
from .errors import UnsupportedType

__all__ = [
    "FieldShape",
    "resolve_shape",
    "map_type",
    "describe_shape",
]

_NONE_TYPE = type(None)

# Lookup is by identity: bool must not fall through to int, nor datetime to date.
_PRIMITIVES: tuple[tuple[object, ColumnType], ...] = (
    (ft.Int8, dtypes.INT8),
    (ft.Int16, dtypes.INT16),
    (ft.Int32, dtypes.INT32),
    (ft.Int64, dtypes.INT64),
    (ft.UInt8, dtypes.UINT8),
    (ft.UInt16, dtypes.UINT16),
    (ft.UInt32, dtypes.UINT32),
    (ft.UInt64, dtypes.UINT64),
    (ft.Float32, dtypes.FLOAT32),
    (ft.Float64, dtypes.FLOAT64),
    (int, dtypes.INT64),
    (float, dtypes.FLOAT64),
    (bool, dtypes.BOOLEAN),
    (str, dtypes.STRING),
    (date, dtypes.DATE),
    (datetime, dtypes.DATETIME),
    (ft.UtcDatetime, dtypes.DATETIME_UTC),
    (time, dtypes.TIME),
)


@dataclass(frozen=True)
class FieldShape:
    """
    Declared type of a field with the optional flag split out.

    Attributes:
        base (Any): Base shape (a class, NewType alias, or Annotated form).
        optional (bool): True when absent values are tolerated.
    """

    base: Any
    optional: bool = False


def describe_shape(shape: object) -> str:
    """Render a shape for error messages."""
    if isinstance(shape, FieldShape):
        inner = describe_shape(shape.base)
        return f"Optional[{inner}]" if shape.optional else inner
    if get_origin(shape) is not None:
        return repr(shape).replace("typing.", "")
    return getattr(shape, "__name__", None) or repr(shape)


def _is_union(shape: object) -> bool:
    return get_origin(shape) in (Union, types.UnionType)


def _split_optional(shape: object) -> tuple[object, bool]:
    # Returns (inner, True) for `X | None`, (shape, False) for anything that is not a union.
    if isinstance(shape, FieldShape):
        if not shape.optional:
            return _split_optional(shape.base)
        return shape.base, True
    if get_origin(shape) is Annotated:
        inner, optional = _split_optional(shape.__origin__)
        if optional:
            return Annotated[(inner, *shape.__metadata__)], True
        return shape, False
    if not _is_union(shape):
        return shape, False
    args = get_args(shape)
    members = [a for a in args if a is not _NONE_TYPE]
    if len(members) == 1 and len(args) == 2:
        return members[0], True
    raise UnsupportedType(describe_shape(shape))


def _contains_optional(shape: object) -> bool:
    if isinstance(shape, FieldShape):
        return shape.optional or _contains_optional(shape.base)
    if get_origin(shape) is Annotated:
        return _contains_optional(shape.__origin__)
    return _is_union(shape)


def resolve_shape(annotation: object) -> FieldShape:
    """
    Split an annotation into its base shape and optional flag.

    Args:
        annotation (object): Field annotation or FieldShape.

    Returns:
        FieldShape: Base shape with at most one optional level removed.

    Raises:
        UnsupportedType: For unions other than `X | None` and for nested optionals.
    """
    base, optional = _split_optional(annotation)
    if _contains_optional(base):
        raise UnsupportedType(describe_shape(annotation))
    return FieldShape(base, optional)


def _map_base(base: object, original: object) -> ColumnType:
    time_zone: str | None = None
    if get_origin(base) is Annotated:
        zones = [m for m in base.__metadata__ if isinstance(m, ft.TimeZone)]
        base = base.__origin__
        if zones:
            if base is not datetime:
                raise UnsupportedType(describe_shape(original))
            time_zone = zones[-1].name

    if time_zone is not None:
        return dtypes.datetime_type(time_zone)

    for shape, column_type in _PRIMITIVES:
        if base is shape:
            return column_type

    if is_enum_type(base):
        return dtypes.STRING

    raise UnsupportedType(describe_shape(original))


def map_type(shape: object) -> ColumnType:
    """
    Map a field shape to its canonical column type.

    Args:
        shape (object): Field annotation, optionally wrapped once in `| None`, or a FieldShape.

    Returns:
        ColumnType: Canonical column type. Optional and bare shapes map identically.

    Raises:
        UnsupportedType: If the shape is outside the supported set.
    """
    resolved = resolve_shape(shape)
    return _map_base(resolved.base, shape)
