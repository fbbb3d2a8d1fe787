import polars as pl
import pytest

from frametype.core import dtypes
from frametype.frames.dtypes import canonical_schema, from_polars, polars_schema, to_polars

PAIRS = [
    (dtypes.INT8, pl.Int8),
    (dtypes.INT16, pl.Int16),
    (dtypes.INT32, pl.Int32),
    (dtypes.INT64, pl.Int64),
    (dtypes.UINT8, pl.UInt8),
    (dtypes.UINT16, pl.UInt16),
    (dtypes.UINT32, pl.UInt32),
    (dtypes.UINT64, pl.UInt64),
    (dtypes.FLOAT32, pl.Float32),
    (dtypes.FLOAT64, pl.Float64),
    (dtypes.BOOLEAN, pl.Boolean),
    (dtypes.STRING, pl.String),
    (dtypes.DATE, pl.Date),
    (dtypes.TIME, pl.Time),
]


@pytest.mark.parametrize(("canonical", "polars_cls"), PAIRS)
def test_every_canonical_type_has_a_polars_dtype(canonical, polars_cls) -> None:
    converted = to_polars(canonical)
    assert converted.base_type() is polars_cls
    assert from_polars(converted) == canonical
    assert from_polars(polars_cls) == canonical


def test_datetime_carries_zone_and_configured_unit() -> None:
    converted = to_polars(dtypes.DATETIME_UTC, time_unit="ns")
    assert converted == pl.Datetime("ns", "UTC")
    assert to_polars(dtypes.DATETIME) == pl.Datetime("us")


def test_datetime_unit_is_dropped_on_the_way_back() -> None:
    assert from_polars(pl.Datetime("ms")) == dtypes.DATETIME
    assert from_polars(pl.Datetime("ns", "UTC")) == dtypes.DATETIME_UTC
    assert from_polars(pl.Datetime("us", "Asia/Tokyo")) == dtypes.datetime_type("Asia/Tokyo")


@pytest.mark.parametrize(
    "dtype",
    [pl.List(pl.Int64), pl.Struct({"a": pl.Int64}), pl.Categorical(), pl.Duration("us"), pl.Binary()],
)
def test_polars_only_dtypes_have_no_counterpart(dtype) -> None:
    assert from_polars(dtype) is None


def test_polars_schema_keeps_order() -> None:
    schema = polars_schema({"b": dtypes.STRING, "a": dtypes.INT32})
    assert isinstance(schema, pl.Schema)
    assert list(schema.names()) == ["b", "a"]
    assert list(schema.dtypes()) == [pl.String(), pl.Int32()]


def test_canonical_schema_keeps_raw_dtype_when_unmapped() -> None:
    observed = canonical_schema({"id": pl.Int64(), "tags": pl.List(pl.String)})
    assert list(observed) == ["id", "tags"]
    assert observed["id"] == dtypes.INT64
    assert observed["tags"] == pl.List(pl.String)
    assert observed["tags"] != dtypes.STRING
