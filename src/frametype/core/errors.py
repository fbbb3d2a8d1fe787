"""
Exception types raised by type mapping, descriptor construction, and frame validation.

Provides typed exceptions for the two failure families:
- SchemaDefinitionError for defects in a record definition (caught when a descriptor is built).
- FrameValidationError for data that does not match a descriptor (caught when a frame is checked).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Every error carries its context as attributes so callers can act on it without
      parsing messages.
    - Validators report the first violation only; fix it and re-run to see the next one.

Examples:
    Catch a missing column and inspect it.

    >>> from frametype.core.errors import MissingColumn, FrameValidationError
    >>> try:
    ...     raise MissingColumn("id")
    ... except FrameValidationError as e:
    ...     name = e.name
    >>> name
    'id'
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

__all__ = [
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


class FrametypeError(Exception):
    """Base class for every error raised by frametype."""


# ============================================================================
# Definition-time errors
# ============================================================================


class SchemaDefinitionError(FrametypeError, TypeError):
    """A record definition cannot be turned into a schema descriptor."""


class UnsupportedType(SchemaDefinitionError):
    """
    Raised when a field's declared type has no canonical column type.

    Attributes:
        shape_description (str): Human-readable rendering of the offending shape.
        field (str | None): Field name, attached by the descriptor builder.
    """

    def __init__(self, shape_description: str, field: str | None = None) -> None:
        self.shape_description = shape_description
        self.field = field
        if field is None:
            msg = f"unsupported field type: {shape_description}"
        else:
            msg = f"unsupported type for field {field!r}: {shape_description}"
        super().__init__(msg)


class DuplicateColumn(SchemaDefinitionError):
    """Raised when a record definition declares the same column name twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicate column name: {name!r}")


# ============================================================================
# Validation-time errors
# ============================================================================


class FrameValidationError(FrametypeError, ValueError):
    """A frame (or observed schema) does not conform to a schema descriptor."""


class MissingColumn(FrameValidationError):
    """Raised when a descriptor column is absent from the observed schema."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing required column: {name!r}")


class TypeMismatch(FrameValidationError):
    """
    Raised when a column is present with a type other than the expected one.

    Attributes:
        name (str): Column name.
        expected (ColumnType): Canonical type declared by the descriptor.
        observed (object): Observed type (a ColumnType, or the engine's raw dtype when it
            has no canonical counterpart).
    """

    def __init__(self, name: str, expected: object, observed: object) -> None:
        self.name = name
        self.expected = expected
        self.observed = observed
        super().__init__(f"column {name!r} has type {observed}, expected {expected}")


class ColumnCountMismatch(FrameValidationError):
    """
    Raised in strict mode when the observed column set differs from the descriptor's.

    Attributes:
        expected (frozenset[str]): Every column name in the descriptor.
        found (frozenset[str]): Every column name in the observed schema.
    """

    def __init__(self, expected: Iterable[str], found: Iterable[str]) -> None:
        self.expected = frozenset(expected)
        self.found = frozenset(found)
        super().__init__(
            f"column set mismatch: expected {sorted(self.expected)!r}, found {sorted(self.found)!r}"
        )

    @property
    def unexpected(self) -> frozenset[str]:
        """Observed columns the descriptor does not declare."""
        return self.found - self.expected

    @property
    def missing(self) -> frozenset[str]:
        """Declared columns the observed schema lacks."""
        return self.expected - self.found


class InvalidEnumValue(FrameValidationError):
    """
    Raised when a string is not a member of an enum-valued column's type.

    Attributes:
        type_name (str): Name of the enum type.
        value (str): Offending value.
        valid_values (tuple[str, ...]): Accepted values, sorted.
        column (str | None): Column the value was read from, when known.
    """

    def __init__(
        self,
        type_name: str,
        value: str,
        valid_values: Iterable[str],
        column: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.value = value
        self.valid_values = tuple(sorted(valid_values))
        self.column = column
        where = f" in column {column!r}" if column is not None else ""
        super().__init__(
            f"invalid {type_name} value {value!r}{where}; valid values are {list(self.valid_values)!r}"
        )


class EnumValuesError(FrameValidationError):
    """Aggregate of every InvalidEnumValue found by a collecting scan."""

    def __init__(self, errors: Sequence[InvalidEnumValue]) -> None:
        self.errors = tuple(errors)
        lines = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{len(self.errors)} invalid enum value(s): {lines}")
