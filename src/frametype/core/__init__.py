"""
Core contracts for frametype (types, descriptors, validation, enum capability).

## Contracts (single source of truth)
- dtypes — closed set of canonical column types.
- typing — field-shape aliases for fixed-width columns and zoned datetimes.
- mapping — field shape -> canonical column type.
- descriptor — frozen, ordered schema descriptors built from record classes.
- validate — standard/strict comparison of a descriptor with an observed schema.
- enums — EnumMembership capability and ValidatedEnum base class.
- errors — exception taxonomy.

## Notes
- Zero-IO policy: stdlib + pydantic only; the tabular engine (polars) is only imported by
  frametype.frames.
- Descriptors are immutable; share them freely across threads.

## Examples
```python
from dataclasses import dataclass
from frametype.core import descriptor_for, validate_schema, INT64, STRING

@dataclass
class User:
    id: int
    name: str

desc = descriptor_for(User)
validate_schema(desc, {"id": INT64, "name": STRING, "extra": STRING})  # standard: ok
```
"""

from __future__ import annotations

from .descriptor import ColumnSpec, SchemaDescriptor, build_descriptor, descriptor_for, fields_of
from .dtypes import (
    BOOLEAN,
    DATE,
    DATETIME,
    DATETIME_UTC,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    TIME,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    ColumnType,
    TypeKind,
    datetime_type,
)
from .enums import EnumMembership, ValidatedEnum, ensure_round_trip, is_enum_type, scan_enum_values
from .errors import (
    ColumnCountMismatch,
    DuplicateColumn,
    EnumValuesError,
    FrametypeError,
    FrameValidationError,
    InvalidEnumValue,
    MissingColumn,
    SchemaDefinitionError,
    TypeMismatch,
    UnsupportedType,
)
from .mapping import FieldShape, map_type, resolve_shape
from .validate import ValidationMode, check_schema, conforms, validate_schema

__all__ = [
    # types
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
    # mapping / descriptors
    "FieldShape",
    "resolve_shape",
    "map_type",
    "ColumnSpec",
    "SchemaDescriptor",
    "build_descriptor",
    "fields_of",
    "descriptor_for",
    # validation
    "ValidationMode",
    "validate_schema",
    "check_schema",
    "conforms",
    # enums
    "EnumMembership",
    "ValidatedEnum",
    "is_enum_type",
    "scan_enum_values",
    "ensure_round_trip",
    # errors
    "FrametypeError",
    "SchemaDefinitionError",
    "UnsupportedType",
    "DuplicateColumn",
    "FrameValidationError",
    "MissingColumn",
    "TypeMismatch",
    "ColumnCountMismatch",
    "InvalidEnumValue",
    "EnumValuesError",
]
