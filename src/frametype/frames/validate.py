"""
Schema validation for polars frames.

Purpose
- Validate polars DataFrames/LazyFrames against schema descriptors from frametype.core.
- Optionally scan enum-valued columns for values outside their enum type.

Source of truth (core)
- frametype.core.descriptor.SchemaDescriptor describes columns/types/nullability/enum types.
- frametype.core.validate implements the standard/strict algorithm over an observed mapping.
- frametype.core.errors provides the exceptions raised here.

Checks performed
- Every descriptor column present with the same canonical type (first violation raised).
- STRICT: no columns outside the descriptor.
- No casting: a frame either conforms or is rejected.

Notes
- LazyFrames are validated from collect_schema(); no data is read for structural checks.
- Enum scans read only the enum columns (distinct, non-null values).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import polars as pl

from frametype.config import FrameSettings
from frametype.core.descriptor import SchemaDescriptor, descriptor_for
from frametype.core.enums import scan_enum_values
from frametype.core.errors import FrameValidationError, InvalidEnumValue
from frametype.core.validate import ValidationMode, check_column, validate_schema

from .dtypes import canonical_schema

__all__ = [
    "FrameLike",
    "resolve_descriptor",
    "observed_schema",
    "validate_frame",
    "validate_frame_strict",
    "frame_conforms",
    "check_enum_values",
]

logger = logging.getLogger(__name__)

FrameLike = pl.DataFrame | pl.LazyFrame | Mapping[str, Any]


def resolve_descriptor(schema: SchemaDescriptor | type) -> SchemaDescriptor:
    """Accept a descriptor or a record class and return the descriptor."""
    if isinstance(schema, SchemaDescriptor):
        return schema
    return descriptor_for(schema)


def observed_schema(frame: FrameLike) -> dict[str, object]:
    """
    Read the observed (column name -> type) mapping of a frame.

    Args:
        frame (pl.DataFrame | pl.LazyFrame | Mapping[str, pl.DataType]): Frame or bare schema.

    Returns:
        dict[str, object]: Canonical ColumnType per column where one exists, otherwise the
            raw polars dtype; in frame column order.
    """
    if isinstance(frame, pl.LazyFrame):
        schema: Mapping[str, Any] = frame.collect_schema()
    elif isinstance(frame, pl.DataFrame):
        schema = frame.schema
    else:
        schema = frame
    return canonical_schema(schema)


def validate_frame(
    frame: FrameLike,
    schema: SchemaDescriptor | type,
    *,
    mode: ValidationMode | str | None = None,
    settings: FrameSettings | None = None,
) -> None:
    """
    Validate a polars frame against a descriptor.

    Args:
        frame (pl.DataFrame | pl.LazyFrame | Mapping): Frame to validate.
        schema (SchemaDescriptor | type): Descriptor or record class.
        mode (ValidationMode | str | None): Validation mode; None uses settings.mode.
        settings (FrameSettings | None): Settings supplying the default mode.

    Raises:
        MissingColumn, TypeMismatch, ColumnCountMismatch: On the first violation.
    """
    desc = resolve_descriptor(schema)
    if mode is None:
        mode = (settings or FrameSettings()).mode
    try:
        validate_schema(desc, observed_schema(frame), mode)
    except FrameValidationError as exc:
        logger.debug(f"Frame rejected by {desc.name or '<anonymous>'}: {exc}")
        raise


def validate_frame_strict(frame: FrameLike, schema: SchemaDescriptor | type) -> None:
    """Validate with ValidationMode.STRICT (exact column set)."""
    validate_frame(frame, schema, mode=ValidationMode.STRICT)


def frame_conforms(
    frame: FrameLike,
    schema: SchemaDescriptor | type,
    *,
    mode: ValidationMode | str = ValidationMode.STANDARD,
) -> bool:
    """Return True when the frame passes validate_frame in the given mode."""
    try:
        validate_frame(frame, schema, mode=mode)
    except FrameValidationError:
        return False
    return True


def check_enum_values(
    frame: pl.DataFrame | pl.LazyFrame,
    schema: SchemaDescriptor | type,
    *,
    fail_fast: bool = True,
) -> list[InvalidEnumValue]:
    """
    Check that every value of every enum-valued column parses with its enum type.

    Args:
        frame (pl.DataFrame | pl.LazyFrame): Frame to scan.
        schema (SchemaDescriptor | type): Descriptor or record class.
        fail_fast (bool): Raise the first invalid value instead of collecting all of them.

    Returns:
        list[InvalidEnumValue]: One entry per distinct invalid value, columns in descriptor
            order and values in first-occurrence order. Empty when fail_fast is True.

    Raises:
        MissingColumn: If an enum column is absent.
        TypeMismatch: If an enum column is not a String column.
        InvalidEnumValue: When fail_fast is True and a value is not a member.
    """
    desc = resolve_descriptor(schema)
    enum_columns = desc.enum_columns
    if not enum_columns:
        return []

    observed = observed_schema(frame)
    for spec in enum_columns:
        check_column(spec, observed)

    names = [spec.name for spec in enum_columns]
    if isinstance(frame, pl.LazyFrame):
        data = frame.select(names).collect()
    else:
        data = frame.select(names)

    errors: list[InvalidEnumValue] = []
    for spec in enum_columns:
        values = data.get_column(spec.name).drop_nulls().unique(maintain_order=True)
        errors.extend(
            scan_enum_values(
                spec.enum_type,  # type: ignore[arg-type]
                values.to_list(),
                column=spec.name,
                fail_fast=fail_fast,
            )
        )
    if errors:
        logger.debug(f"{len(errors)} invalid enum value(s) in {desc.name or '<anonymous>'}")
    return errors
