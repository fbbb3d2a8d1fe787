"""
frametype.frames — polars adapter for frametype descriptors.

## Responsibilities
- Translate canonical column types to and from polars dtypes.
- Validate polars DataFrames/LazyFrames against descriptors (standard/strict), and scan
  enum-valued columns on request.
- Generate the per-column accessor surface (names, types, dtypes, pl.col selectors) and
  empty frames from descriptors.

## Public API
- FrameSchema / frame_schema / schema_of — facade and decorator for record classes.
- ColumnAccessors — accessor surface without validation.
- validate_frame / validate_frame_strict / frame_conforms / check_enum_values.
- to_polars / from_polars — dtype bridge.

## Import DAG discipline
- Depends on stdlib, polars, frametype.core and frametype.config.
- frametype.core never imports this package.

## Examples
```python
import polars as pl
from dataclasses import dataclass
from frametype.frames import FrameSchema

@dataclass
class User:
    id: int
    name: str

users = FrameSchema.for_record(User)
users.validate(pl.DataFrame({"id": [1], "name": ["ada"]}))
users.empty_dataset().schema  # Schema({'id': Int64, 'name': String})
```
"""

from __future__ import annotations

from .accessors import ColumnAccessors, FieldNamespace
from .dtypes import canonical_schema, from_polars, polars_schema, to_polars
from .schema import FrameSchema, frame_schema, schema_of
from .validate import (
    check_enum_values,
    frame_conforms,
    observed_schema,
    validate_frame,
    validate_frame_strict,
)

__all__ = [
    "ColumnAccessors",
    "FieldNamespace",
    "FrameSchema",
    "frame_schema",
    "schema_of",
    "to_polars",
    "from_polars",
    "polars_schema",
    "canonical_schema",
    "observed_schema",
    "validate_frame",
    "validate_frame_strict",
    "frame_conforms",
    "check_enum_values",
]
