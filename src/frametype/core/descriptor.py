"""
Frozen schema descriptors built from record definitions.

Notes:
    - A descriptor is an ordered, immutable list of (column name, canonical type) pairs,
      plus per-column nullability and the enum type backing enum-valued columns.
    - Order is declaration order and is significant: positional lookups and every
      "all columns" aggregate follow it.
    - Column names are unique; duplicates are rejected on construction.
    - Core is zero-IO (stdlib + pydantic); frametype.frames materializes frames from
      descriptors and validates frames against them.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import cache
from typing import Annotated, Any, ClassVar, get_origin, get_type_hints

from pydantic import BaseModel

from .dtypes import ColumnType
from .enums import is_enum_type
from .errors import DuplicateColumn, UnsupportedType
from .mapping import map_type, resolve_shape

__all__ = [
    "ColumnSpec",
    "SchemaDescriptor",
    "build_descriptor",
    "fields_of",
    "descriptor_for",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    """
    One column of a schema descriptor.

    Attributes:
        name (str): Column name (the record's field name).
        dtype (ColumnType): Canonical column type.
        nullable (bool): True when the field was declared optional.
        enum_type (type | None): EnumMembership class backing an enum-valued column.
    """

    name: str
    dtype: ColumnType
    nullable: bool = False
    enum_type: type | None = None


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    Frozen, ordered descriptor for a record definition.

    Attributes:
        columns (tuple[ColumnSpec, ...]): Columns in declaration order.
        name (str | None): Record name, when built from a class.

    Raises:
        DuplicateColumn: If two columns share a name.

    Examples:
        >>> from frametype.core.descriptor import build_descriptor
        >>> desc = build_descriptor([("id", int), ("name", str)], name="User")
        >>> desc.names
        ('id', 'name')
        >>> desc.column_name_at(2) is None
        True
    """

    columns: tuple[ColumnSpec, ...]
    name: str | None = None
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        columns = tuple(self.columns)
        index: dict[str, int] = {}
        for position, spec in enumerate(columns):
            if spec.name in index:
                raise DuplicateColumn(spec.name)
            index[spec.name] = position
        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[ColumnSpec]:
        return iter(self.columns)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def dtypes(self) -> tuple[ColumnType, ...]:
        return tuple(c.dtype for c in self.columns)

    @property
    def required(self) -> tuple[str, ...]:
        """Columns declared without an optional wrapper."""
        return tuple(c.name for c in self.columns if not c.nullable)

    @property
    def nullable(self) -> tuple[str, ...]:
        """Columns declared optional."""
        return tuple(c.name for c in self.columns if c.nullable)

    @property
    def enum_columns(self) -> tuple[ColumnSpec, ...]:
        return tuple(c for c in self.columns if c.enum_type is not None)

    def column(self, name: str) -> ColumnSpec | None:
        position = self._index.get(name)
        return None if position is None else self.columns[position]

    def index_of(self, name: str) -> int | None:
        return self._index.get(name)

    def column_name_at(self, index: int) -> str | None:
        """Name at a position, or None when the position is out of range (negatives included)."""
        if 0 <= index < len(self.columns):
            return self.columns[index].name
        return None

    def type_at(self, index: int) -> ColumnType | None:
        """Type at a position, or None when the position is out of range (negatives included)."""
        if 0 <= index < len(self.columns):
            return self.columns[index].dtype
        return None

    def as_dict(self) -> dict[str, ColumnType]:
        return {c.name: c.dtype for c in self.columns}


def build_descriptor(
    fields: Iterable[tuple[str, Any]],
    *,
    name: str | None = None,
) -> SchemaDescriptor:
    """
    Build a descriptor from an ordered (field name, field shape) list.

    Args:
        fields (Iterable[tuple[str, Any]]): Field names and declared shapes, in order.
        name (str | None): Optional record name carried on the descriptor.

    Returns:
        SchemaDescriptor: Columns in the same order as `fields`.

    Raises:
        UnsupportedType: If a shape has no canonical type; `field` names the offender.
        DuplicateColumn: If a field name repeats.
    """
    specs: list[ColumnSpec] = []
    seen: set[str] = set()
    for field_name, shape in fields:
        if field_name in seen:
            raise DuplicateColumn(field_name)
        seen.add(field_name)
        try:
            resolved = resolve_shape(shape)
            dtype = map_type(resolved)
        except UnsupportedType as exc:
            raise UnsupportedType(exc.shape_description, field=field_name) from exc
        base = resolved.base
        if get_origin(base) is Annotated:
            base = base.__origin__
        specs.append(
            ColumnSpec(
                name=field_name,
                dtype=dtype,
                nullable=resolved.optional,
                enum_type=base if is_enum_type(base) else None,
            )
        )
    desc = SchemaDescriptor(columns=tuple(specs), name=name)
    logger.debug(f"Built schema descriptor {name or '<anonymous>'} with {len(desc)} columns")
    return desc


def fields_of(record: type) -> list[tuple[str, Any]]:
    """
    Derive the ordered (field name, annotation) list of a record class.

    Supports pydantic models, dataclasses, and other annotated classes (TypedDict,
    NamedTuple, plain classes). ClassVar annotations are skipped.

    Args:
        record (type): Record class.

    Returns:
        list[tuple[str, Any]]: Fields in declaration order.

    Raises:
        TypeError: If `record` is not a class.
    """
    if not isinstance(record, type):
        raise TypeError(f"expected a record class, got {record!r}")

    if issubclass(record, BaseModel):
        out: list[tuple[str, Any]] = []
        for field_name, info in record.model_fields.items():
            annotation = info.annotation
            # pydantic moves Annotated metadata (e.g. TimeZone markers) onto the FieldInfo.
            if info.metadata:
                annotation = Annotated[(annotation, *info.metadata)]
            out.append((field_name, annotation))
        return out

    hints = get_type_hints(record, include_extras=True)
    if dataclasses.is_dataclass(record):
        return [(f.name, hints[f.name]) for f in dataclasses.fields(record)]
    return [
        (field_name, hint)
        for field_name, hint in hints.items()
        if hint is not ClassVar and get_origin(hint) is not ClassVar
    ]


@cache
def descriptor_for(record: type) -> SchemaDescriptor:
    """
    Build (once) the descriptor of a record class.

    Args:
        record (type): Pydantic model, dataclass, or annotated class.

    Returns:
        SchemaDescriptor: Memoized descriptor named after the class.
    """
    return build_descriptor(fields_of(record), name=record.__name__)
