"""
FrameSchema facade: one record definition's accessors and validators, bound to settings.

## Public API
- FrameSchema — ColumnAccessors plus validate/validate_strict/conforms/check_enum_values.
- frame_schema — class decorator attaching a FrameSchema to a record class.
- schema_of — the FrameSchema of a record class (attached or memoized).

## Examples
```python
from pydantic import BaseModel
import polars as pl
from frametype.frames import frame_schema

@frame_schema
class Trade(BaseModel):
    id: int
    price: float

df = pl.DataFrame({"id": [1], "price": [9.5]})
Trade.cols.validate(df)
df.select(Trade.cols.expr.price * 2)
```
"""

from __future__ import annotations

from collections.abc import Callable
from functools import cache
from typing import overload

import polars as pl

from frametype.config import FrameSettings
from frametype.core.descriptor import SchemaDescriptor, descriptor_for
from frametype.core.errors import EnumValuesError, FrameValidationError, InvalidEnumValue
from frametype.core.validate import ValidationMode

from .accessors import ColumnAccessors
from .validate import FrameLike, check_enum_values, validate_frame

__all__ = [
    "FrameSchema",
    "frame_schema",
    "schema_of",
]

_ATTACHED = "__frame_schema__"


class FrameSchema(ColumnAccessors):
    """
    Accessors and validators for one descriptor.

    Notes:
        - validate() runs the structural check in settings.mode, then the row-level enum
          policy in settings.enum_check ("off", "fail_fast" or "collect").
        - Bare schema mappings (no data) only get the structural check.
    """

    @classmethod
    def for_record(cls, record: type, *, settings: FrameSettings | None = None) -> FrameSchema:
        """Build the facade for a record class; memoized when default settings are used."""
        if settings is None and cls is FrameSchema:
            return _default_for_record(record)
        return cls(descriptor_for(record), settings=settings)

    def validate(self, frame: FrameLike, *, mode: ValidationMode | str | None = None) -> None:
        """
        Validate a frame against this schema.

        Raises:
            MissingColumn, TypeMismatch, ColumnCountMismatch: Structural violations.
            InvalidEnumValue: First invalid enum value (enum_check="fail_fast").
            EnumValuesError: Every invalid enum value (enum_check="collect").
        """
        validate_frame(frame, self.descriptor, mode=mode, settings=self.settings)
        if not isinstance(frame, (pl.DataFrame, pl.LazyFrame)):
            return
        policy = self.settings.enum_check
        if policy == "fail_fast":
            check_enum_values(frame, self.descriptor, fail_fast=True)
        elif policy == "collect":
            errors = check_enum_values(frame, self.descriptor, fail_fast=False)
            if errors:
                raise EnumValuesError(errors)

    def validate_strict(self, frame: FrameLike) -> None:
        self.validate(frame, mode=ValidationMode.STRICT)

    def conforms(self, frame: FrameLike, *, mode: ValidationMode | str | None = None) -> bool:
        try:
            self.validate(frame, mode=mode)
        except FrameValidationError:
            return False
        return True

    def check_enum_values(
        self, frame: pl.DataFrame | pl.LazyFrame, *, fail_fast: bool = True
    ) -> list[InvalidEnumValue]:
        return check_enum_values(frame, self.descriptor, fail_fast=fail_fast)


@cache
def _default_for_record(record: type) -> FrameSchema:
    return FrameSchema(descriptor_for(record))


@overload
def frame_schema(cls: type, /) -> type: ...


@overload
def frame_schema(
    cls: None = None, /, *, attr: str = "cols", settings: FrameSettings | None = None
) -> Callable[[type], type]: ...


def frame_schema(
    cls: type | None = None,
    /,
    *,
    attr: str = "cols",
    settings: FrameSettings | None = None,
) -> type | Callable[[type], type]:
    """
    Class decorator attaching a FrameSchema to a record class under `attr`.

    Apply it above @dataclass so the dataclass fields already exist.

    Args:
        cls (type | None): Record class (when used without arguments).
        attr (str): Attribute name for the facade.
        settings (FrameSettings | None): Settings bound to the facade.

    Raises:
        ValueError: If `attr` collides with a field of the record.
        UnsupportedType, DuplicateColumn: If the record cannot be described.
    """

    def wrap(record: type) -> type:
        fs = FrameSchema.for_record(record, settings=settings)
        if attr in fs.descriptor:
            raise ValueError(f"{record.__name__} already has a field named {attr!r}")
        setattr(record, attr, fs)
        setattr(record, _ATTACHED, fs)
        return record

    if cls is None:
        return wrap
    return wrap(cls)


def schema_of(record: type | SchemaDescriptor) -> FrameSchema:
    """Return the FrameSchema attached to a record class, building one if needed."""
    if isinstance(record, SchemaDescriptor):
        return FrameSchema(record)
    attached = record.__dict__.get(_ATTACHED)
    if isinstance(attached, FrameSchema):
        return attached
    return FrameSchema.for_record(record)
