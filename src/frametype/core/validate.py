"""
Structural validation of an observed schema against a schema descriptor.

Purpose
- Compare a descriptor with an observed (column name -> type) mapping supplied by a
  tabular engine, in one of two modes.

Checks performed
- For each descriptor column, in declaration order: present, then same type.
  The first violation is raised (MissingColumn, then TypeMismatch for that column).
- STANDARD: extra observed columns are ignored.
- STRICT: after every column passed, the observed name set must equal the descriptor's,
  otherwise ColumnCountMismatch (full expected/found sets).

Notes
- Enum-valued columns are only checked to be String; row values are not inspected here
  (see frametype.core.enums.scan_enum_values).
- Pure: neither input is mutated, no IO, deterministic for given inputs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum

from .descriptor import ColumnSpec, SchemaDescriptor
from .errors import ColumnCountMismatch, FrameValidationError, MissingColumn, TypeMismatch

__all__ = [
    "ValidationMode",
    "coerce_mode",
    "check_column",
    "validate_schema",
    "check_schema",
    "conforms",
]

logger = logging.getLogger(__name__)


class ValidationMode(Enum):
    """Standard tolerates extra columns; strict requires the exact column set."""

    STANDARD = "standard"
    STRICT = "strict"


def coerce_mode(mode: ValidationMode | str) -> ValidationMode:
    """
    Normalize a mode given as enum or string.

    Raises:
        ValueError: If the string is not "standard" or "strict" (case-insensitive).
    """
    if isinstance(mode, ValidationMode):
        return mode
    value = (mode or "").strip().lower()
    try:
        return ValidationMode(value)
    except ValueError:
        allowed = sorted(m.value for m in ValidationMode)
        raise ValueError(f"validation mode must be one of {allowed} (got {mode!r})") from None


def check_column(spec: ColumnSpec, observed: Mapping[str, object]) -> None:
    """
    Check one descriptor column against the observed schema.

    Raises:
        MissingColumn: If the column is absent.
        TypeMismatch: If it is present with another type.
    """
    if spec.name not in observed:
        raise MissingColumn(spec.name)
    actual = observed[spec.name]
    if actual != spec.dtype:
        raise TypeMismatch(spec.name, spec.dtype, actual)


def validate_schema(
    descriptor: SchemaDescriptor,
    observed: Mapping[str, object],
    mode: ValidationMode | str = ValidationMode.STANDARD,
) -> None:
    """
    Validate an observed schema against a descriptor.

    Args:
        descriptor (SchemaDescriptor): Expected columns.
        observed (Mapping[str, object]): Observed column name -> type (ColumnType when the
            engine dtype has a canonical counterpart).
        mode (ValidationMode | str): STANDARD or STRICT.

    Raises:
        MissingColumn: First descriptor column absent from `observed`.
        TypeMismatch: First descriptor column present with another type.
        ColumnCountMismatch: STRICT only, when the name sets differ.
    """
    mode = coerce_mode(mode)
    for spec in descriptor:
        check_column(spec, observed)

    if mode is ValidationMode.STRICT:
        expected = set(descriptor.names)
        found = set(observed)
        if expected != found:
            raise ColumnCountMismatch(expected, found)

    logger.debug(
        f"Schema {descriptor.name or '<anonymous>'} validated ({mode.value}, {len(observed)} columns)"
    )


def check_schema(
    descriptor: SchemaDescriptor,
    observed: Mapping[str, object],
    mode: ValidationMode | str = ValidationMode.STANDARD,
) -> FrameValidationError | None:
    """Like validate_schema, but return the violation instead of raising it."""
    try:
        validate_schema(descriptor, observed, mode)
    except FrameValidationError as exc:
        logger.debug(f"Schema {descriptor.name or '<anonymous>'} rejected: {exc}")
        return exc
    return None


def conforms(
    descriptor: SchemaDescriptor,
    observed: Mapping[str, object],
    mode: ValidationMode | str = ValidationMode.STANDARD,
) -> bool:
    """Return True when `observed` passes validate_schema."""
    return check_schema(descriptor, observed, mode) is None
