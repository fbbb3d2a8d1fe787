from dataclasses import dataclass

import polars as pl
import pytest

from frametype.core.descriptor import build_descriptor
from frametype.core.enums import ValidatedEnum
from frametype.core.errors import (
    ColumnCountMismatch,
    InvalidEnumValue,
    MissingColumn,
    TypeMismatch,
)
from frametype.core.typing import Int32
from frametype.core.validate import ValidationMode
from frametype.frames.validate import (
    check_enum_values,
    frame_conforms,
    observed_schema,
    validate_frame,
    validate_frame_strict,
)


class Status(ValidatedEnum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class Ticket:
    id: int
    title: str
    status: Status
    owner: Status | None = None


def _tickets(**extra) -> pl.DataFrame:
    data = {
        "id": [1, 2, 3],
        "title": ["a", "b", "c"],
        "status": ["open", "closed", "open"],
        "owner": [None, "open", None],
    }
    data.update(extra)
    return pl.DataFrame(data)


def test_standard_mode_accepts_extra_columns() -> None:
    df = _tickets(extra=[True, False, True])
    validate_frame(df, Ticket)
    validate_frame(df.lazy(), Ticket)
    assert frame_conforms(df, Ticket)


def test_strict_mode_rejects_extra_columns() -> None:
    df = _tickets(extra=[1, 2, 3])
    with pytest.raises(ColumnCountMismatch) as info:
        validate_frame_strict(df, Ticket)
    assert info.value.unexpected == frozenset({"extra"})
    assert not frame_conforms(df.lazy(), Ticket, mode=ValidationMode.STRICT)
    validate_frame_strict(_tickets(), Ticket)


def test_strict_mode_ignores_column_order() -> None:
    df = _tickets().select(["owner", "status", "title", "id"])
    validate_frame(df, Ticket, mode="strict")


def test_missing_column_reported_before_extras() -> None:
    df = _tickets(extra=[0, 0, 0]).drop("title")
    with pytest.raises(MissingColumn) as info:
        validate_frame(df, Ticket, mode=ValidationMode.STRICT)
    assert info.value.name == "title"


def test_integer_width_mismatch_is_a_type_mismatch() -> None:
    desc = build_descriptor([("n", Int32)])
    df = pl.DataFrame({"n": [1, 2]})
    with pytest.raises(TypeMismatch) as info:
        validate_frame(df, desc)
    assert str(info.value.observed) == "Int64"
    validate_frame(df.with_columns(pl.col("n").cast(pl.Int32)), desc)


def test_unmapped_polars_dtype_never_matches() -> None:
    desc = build_descriptor([("tags", str)])
    df = pl.DataFrame({"tags": [["a"], ["b"]]})
    with pytest.raises(TypeMismatch):
        validate_frame(df, desc)


def test_observed_schema_reads_lazy_frames_without_data() -> None:
    lf = pl.LazyFrame({"id": [1], "title": ["x"]})
    observed = observed_schema(lf)
    assert list(observed) == ["id", "title"]
    assert str(observed["title"]) == "String"


def test_bare_schema_mapping_is_accepted() -> None:
    validate_frame({"id": pl.Int64, "title": pl.String, "status": pl.String, "owner": pl.String}, Ticket)


def test_enum_values_fail_fast() -> None:
    df = _tickets(status=["open", "pending", "archived"])
    with pytest.raises(InvalidEnumValue) as info:
        check_enum_values(df, Ticket)
    assert info.value.column == "status"
    assert info.value.value == "pending"


def test_enum_values_collect_every_distinct_violation() -> None:
    df = _tickets(status=["open", "pending", "pending"], owner=["nobody", None, "open"])
    errors = check_enum_values(df.lazy(), Ticket, fail_fast=False)
    assert [(e.column, e.value) for e in errors] == [("status", "pending"), ("owner", "nobody")]


def test_enum_nulls_are_skipped() -> None:
    assert check_enum_values(_tickets(), Ticket, fail_fast=False) == []


def test_enum_column_must_be_string() -> None:
    df = _tickets(status=[1, 2, 3])
    with pytest.raises(TypeMismatch):
        check_enum_values(df, Ticket)


def test_descriptor_without_enum_columns_scans_nothing() -> None:
    desc = build_descriptor([("id", int)])
    assert check_enum_values(pl.DataFrame({"id": [1]}), desc) == []
