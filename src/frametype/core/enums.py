"""
Enum membership capability for enum-valued columns.

Enum-valued fields are stored as String columns. Any type can back such a field as long
as it can list its accepted strings, test membership, parse a string into a member and
render a member back. The type mapper and validators only ever talk to that capability
(EnumMembership), never to concrete enum classes.

Responsibilities
- Define the EnumMembership protocol.
- Provide ValidatedEnum, a str-backed Enum base implementing the protocol.
- Provide zero-IO helpers to scan string values and to check the parse/render round-trip.

Design principles
-----------------
1) Structural validation only checks that an enum column is a String column.
2) Row-level membership is opt-in: callers scan values explicitly (see scan_enum_values,
   or frametype.frames.validate.check_enum_values for polars frames).
3) Serialized values are the enum `.value` strings; they are what lives in the frame.

Examples
--------
>>> from frametype.core.enums import ValidatedEnum
>>> class Priority(ValidatedEnum):
...     LOW = "low"
...     HIGH = "high"
>>> sorted(Priority.valid_values())
['high', 'low']
>>> Priority.parse("high") is Priority.HIGH
True
>>> Priority.HIGH.render()
'high'
"""

from __future__ import annotations

import inspect
from abc import abstractmethod
from collections.abc import Iterable
from enum import Enum
from typing import Protocol, Self, get_origin, runtime_checkable

from .errors import InvalidEnumValue

__all__ = [
    "EnumMembership",
    "ValidatedEnum",
    "is_enum_type",
    "scan_enum_values",
    "ensure_round_trip",
]


@runtime_checkable
class EnumMembership(Protocol):
    """
    Capability every enum-valued field type must provide.

    Types may satisfy it structurally or subclass it explicitly. Explicit subclasses
    inherit is_member() and must implement valid_values(), parse() and render(), with
    parse(render(x)) == x for every member.
    """

    @classmethod
    @abstractmethod
    def valid_values(cls) -> frozenset[str]: ...

    @classmethod
    def is_member(cls, value: str) -> bool:
        return value in cls.valid_values()

    @classmethod
    @abstractmethod
    def parse(cls, value: str) -> Self: ...

    @abstractmethod
    def render(self) -> str: ...


class ValidatedEnum(str, Enum):
    """
    String-backed Enum implementing EnumMembership.

    Subclass it and declare members with their serialized string values.

    Raises:
        InvalidEnumValue: From parse() when the string is not a member value.
    """

    @classmethod
    def valid_values(cls) -> frozenset[str]:
        return frozenset(member.value for member in cls)

    @classmethod
    def is_member(cls, value: str) -> bool:
        return value in cls.valid_values()

    @classmethod
    def parse(cls, value: str) -> Self:
        if not cls.is_member(value):
            raise InvalidEnumValue(cls.__name__, value, cls.valid_values())
        return cls(value)

    def render(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


def is_enum_type(shape: object) -> bool:
    """
    Check whether a field shape satisfies the EnumMembership capability.

    Args:
        shape (object): Candidate field shape (usually a class).

    Returns:
        bool: True for concrete classes providing valid_values/is_member/parse/render.
            Explicit EnumMembership subclasses that leave a method abstract are rejected.
    """
    if not isinstance(shape, type) or get_origin(shape) is not None:
        return False
    if inspect.isabstract(shape):
        return False
    return issubclass(shape, EnumMembership)


def scan_enum_values(
    enum_type: type[EnumMembership],
    values: Iterable[str | None],
    *,
    column: str | None = None,
    fail_fast: bool = True,
) -> list[InvalidEnumValue]:
    """
    Parse every value with the enum type and report the ones that are not members.

    Args:
        enum_type (type[EnumMembership]): Enum capability to parse with.
        values (Iterable[str | None]): Raw column values; None (null) is skipped.
        column (str | None): Column name attached to reported errors.
        fail_fast (bool): Raise on the first invalid value instead of collecting.

    Returns:
        list[InvalidEnumValue]: One error per distinct invalid value, in first-seen order.
            Always empty when fail_fast is True (the first error is raised instead).

    Raises:
        InvalidEnumValue: When fail_fast is True and a value is not a member.
    """
    errors: list[InvalidEnumValue] = []
    seen: set[str] = set()
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        try:
            enum_type.parse(value)
        except InvalidEnumValue as exc:
            err = InvalidEnumValue(exc.type_name, exc.value, exc.valid_values, column=column)
            if fail_fast:
                raise err from None
            errors.append(err)
    return errors


def ensure_round_trip(enum_type: type[EnumMembership]) -> None:
    """
    Assert that parse(render(x)) == x for every member of an enum type.

    Args:
        enum_type (type[EnumMembership]): Enum capability to inspect.

    Raises:
        AssertionError: If a rendered value is not listed in valid_values() or does not
            parse back to the same member.
    """
    valid = enum_type.valid_values()
    for value in sorted(valid):
        member = enum_type.parse(value)
        rendered = member.render()
        if rendered not in valid:
            raise AssertionError(
                f"{enum_type.__name__}: {member!r} renders to {rendered!r}, not a valid value"
            )
        if enum_type.parse(rendered) != member:
            raise AssertionError(
                f"{enum_type.__name__}: {rendered!r} does not parse back to {member!r}"
            )
