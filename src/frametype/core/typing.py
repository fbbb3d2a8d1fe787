"""
Field-shape aliases for declaring fixed-width columns on record classes.

Python has one `int` and one `float`, so widths other than the 64-bit defaults are
spelled with NewType wrappers. They behave exactly like the wrapped builtin at runtime
(pydantic validates them as int/float) and only matter to the type mapper.

Notes:
    - `int` maps to Int64 and `float` to Float64; use the aliases below for other widths.
    - `UtcDatetime` is a datetime column pinned to the UTC zone. For any other zone use
      `Annotated[datetime, TimeZone("Europe/Paris")]`.
    - Contains no runtime logic beyond the marker class.

Examples:
    >>> from dataclasses import dataclass
    >>> from frametype.core.typing import Int32, UInt8
    >>> @dataclass
    ... class Reading:
    ...     sensor: UInt8
    ...     value: Int32
    >>> Reading(sensor=UInt8(3), value=Int32(-40)).value
    -40
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import NewType

__all__ = [
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "UtcDatetime",
    "TimeZone",
]

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt8 = NewType("UInt8", int)
UInt16 = NewType("UInt16", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

UtcDatetime = NewType("UtcDatetime", datetime)


@dataclass(frozen=True)
class TimeZone:
    """`Annotated` marker attaching a time zone to a datetime field."""

    name: str
