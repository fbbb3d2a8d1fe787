"""
Column accessor surface generated from a schema descriptor.

For every column `f` a ColumnAccessors object exposes
- names.f  -> "f"
- types.f  -> canonical ColumnType
- dtypes.f -> polars dtype
- expr.f   -> pl.col("f")

plus ordered aggregates over all columns (all_columns, all_types, all_selectors),
positional lookups (column_name_at, type_at), name lookup (col_expr) and an empty
frame built from the descriptor.

Notes
- Namespaces are read-only Mappings too: `names["f"]` works and is the way to reach
  columns whose names shadow Mapping methods (e.g. a column called "keys").
- Positional and name lookups return None on a miss; they never raise.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TypeVar

import polars as pl

from frametype.config import FrameSettings
from frametype.core.descriptor import SchemaDescriptor
from frametype.core.dtypes import ColumnType

from .dtypes import polars_schema, to_polars

__all__ = [
    "FieldNamespace",
    "ColumnAccessors",
]

T = TypeVar("T")


class FieldNamespace(Mapping[str, T]):
    """Read-only attribute/item view over per-column values, in column order."""

    __slots__ = ("_kind", "_items")

    def __init__(self, kind: str, items: Mapping[str, T]) -> None:
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_items", dict(items))

    def __getattr__(self, name: str) -> T:
        if name in FieldNamespace.__slots__:
            raise AttributeError(name)
        try:
            return self._items[name]
        except KeyError:
            raise AttributeError(f"no column {name!r} in {self._kind}") from None

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{self._kind} is read-only")

    # Immutable: copies share the instance; pickling rebuilds through __init__.
    def __copy__(self) -> FieldNamespace[T]:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> FieldNamespace[T]:
        return self

    def __reduce__(self) -> tuple[type, tuple[str, dict[str, T]]]:
        return (type(self), (self._kind, self._items))

    def __getitem__(self, name: str) -> T:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __dir__(self) -> list[str]:
        return list(self._items)

    def __repr__(self) -> str:
        return f"{self._kind}({', '.join(self._items)})"


class ColumnAccessors:
    """
    Accessor surface over the columns of one descriptor.

    Attributes:
        descriptor (SchemaDescriptor): Source descriptor.
        settings (FrameSettings): Supplies the DateTime time unit for polars dtypes.
        names (FieldNamespace[str]): Column names.
        types (FieldNamespace[ColumnType]): Canonical column types.
        dtypes (FieldNamespace[pl.DataType]): Polars dtypes.
        expr (FieldNamespace[pl.Expr]): Column selector expressions.

    Examples:
        >>> from frametype.core.descriptor import build_descriptor
        >>> cols = ColumnAccessors(build_descriptor([("id", int), ("name", str)]))
        >>> cols.names.id
        'id'
        >>> cols.all_columns()
        ['id', 'name']
    """

    def __init__(self, descriptor: SchemaDescriptor, *, settings: FrameSettings | None = None):
        self.descriptor = descriptor
        self.settings = settings or FrameSettings()
        unit = self.settings.time_unit
        self.names: FieldNamespace[str] = FieldNamespace(
            "names", {n: n for n in descriptor.names}
        )
        self.types: FieldNamespace[ColumnType] = FieldNamespace("types", descriptor.as_dict())
        self.dtypes: FieldNamespace[pl.DataType] = FieldNamespace(
            "dtypes", {c.name: to_polars(c.dtype, time_unit=unit) for c in descriptor}
        )
        self.expr: FieldNamespace[pl.Expr] = FieldNamespace(
            "expr", {n: pl.col(n) for n in descriptor.names}
        )

    def __len__(self) -> int:
        return len(self.descriptor)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.descriptor.name or '<anonymous>'}: {', '.join(self.names)})"

    # Names -----------------------------------------------------------------

    def all_columns(self) -> list[str]:
        """All column names in declaration order (for df.select / df.columns checks)."""
        return list(self.descriptor.names)

    def column_names(self) -> list[str]:
        return self.all_columns()

    def columns(self) -> list[str]:
        return self.all_columns()

    def column_name_at(self, index: int) -> str | None:
        return self.descriptor.column_name_at(index)

    # Types -----------------------------------------------------------------

    def all_types(self) -> list[ColumnType]:
        """Canonical types, index-aligned with all_columns()."""
        return list(self.descriptor.dtypes)

    def all_dtypes(self) -> list[pl.DataType]:
        """Polars dtypes, index-aligned with all_columns()."""
        return list(self.dtypes.values())

    def type_at(self, index: int) -> ColumnType | None:
        return self.descriptor.type_at(index)

    # Selectors -------------------------------------------------------------

    def all_selectors(self) -> list[pl.Expr]:
        """Column expressions for lazy operations, index-aligned with all_columns()."""
        return list(self.expr.values())

    def all_cols(self) -> list[pl.Expr]:
        return self.all_selectors()

    def col_expr(self, name: str) -> pl.Expr | None:
        """Selector for a column, or None when the descriptor has no such column."""
        return self.expr.get(name)

    def select(self, frame: pl.DataFrame | pl.LazyFrame) -> pl.DataFrame | pl.LazyFrame:
        """Project a frame onto the descriptor columns, in declaration order."""
        return frame.select(self.all_selectors())

    # Materialization -------------------------------------------------------

    def empty_dataset(self) -> pl.DataFrame:
        """
        Build a zero-row DataFrame whose schema is exactly the descriptor's.

        Returns:
            pl.DataFrame: Columns all_columns() typed as all_dtypes(), in order.
        """
        return pl.DataFrame(
            schema=polars_schema(self.descriptor.as_dict(), time_unit=self.settings.time_unit)
        )

    def empty_frame(self) -> pl.DataFrame:
        return self.empty_dataset()
