from datetime import datetime

import pytest

from frametype.core import dtypes
from frametype.core.descriptor import build_descriptor
from frametype.core.errors import ColumnCountMismatch, MissingColumn, TypeMismatch
from frametype.core.typing import Int32
from frametype.core.validate import ValidationMode, check_schema, conforms, validate_schema

D = build_descriptor([("id", int), ("name", str)], name="User")


def test_standard_accepts_extra_columns() -> None:
    observed = {"id": dtypes.INT64, "name": dtypes.STRING, "extra": dtypes.BOOLEAN}
    validate_schema(D, observed, ValidationMode.STANDARD)
    assert conforms(D, observed)


def test_strict_rejects_extra_columns_with_full_sets() -> None:
    observed = {"id": dtypes.INT64, "name": dtypes.STRING, "extra": dtypes.BOOLEAN}
    with pytest.raises(ColumnCountMismatch) as info:
        validate_schema(D, observed, ValidationMode.STRICT)
    err = info.value
    assert err.expected == frozenset({"id", "name"})
    assert err.found == frozenset({"id", "name", "extra"})
    assert err.unexpected == frozenset({"extra"})
    assert err.missing == frozenset()


def test_strict_accepts_exact_set_in_any_order() -> None:
    observed = {"name": dtypes.STRING, "id": dtypes.INT64}
    validate_schema(D, observed, ValidationMode.STRICT)


def test_missing_column_takes_priority_over_extra_columns() -> None:
    observed = {"name": dtypes.STRING, "extra": dtypes.BOOLEAN}
    with pytest.raises(MissingColumn) as info:
        validate_schema(D, observed, ValidationMode.STRICT)
    assert info.value.name == "id"


def test_first_missing_column_in_descriptor_order_is_reported() -> None:
    with pytest.raises(MissingColumn) as info:
        validate_schema(D, {}, ValidationMode.STANDARD)
    assert info.value.name == "id"


def test_type_mismatch_reports_both_types() -> None:
    desc = build_descriptor([("age", Int32)])
    with pytest.raises(TypeMismatch) as info:
        validate_schema(desc, {"age": dtypes.STRING})
    err = info.value
    assert (err.name, err.expected, err.observed) == ("age", dtypes.INT32, dtypes.STRING)
    assert "Int32" in str(err) and "String" in str(err)


def test_type_mismatch_before_count_mismatch_in_strict_mode() -> None:
    observed = {"id": dtypes.INT32, "name": dtypes.STRING, "extra": dtypes.BOOLEAN}
    with pytest.raises(TypeMismatch):
        validate_schema(D, observed, ValidationMode.STRICT)


def test_zone_is_part_of_the_type() -> None:
    desc = build_descriptor([("ts", datetime)])
    with pytest.raises(TypeMismatch):
        validate_schema(desc, {"ts": dtypes.DATETIME_UTC})
    validate_schema(desc, {"ts": dtypes.DATETIME})


def test_unknown_observed_types_never_match() -> None:
    with pytest.raises(TypeMismatch) as info:
        validate_schema(D, {"id": "List(Int64)", "name": dtypes.STRING})
    assert info.value.observed == "List(Int64)"


def test_check_schema_returns_error_as_value() -> None:
    assert check_schema(D, {"id": dtypes.INT64, "name": dtypes.STRING}) is None
    err = check_schema(D, {"id": dtypes.INT64})
    assert isinstance(err, MissingColumn)
    assert err.name == "name"


def test_mode_accepts_strings() -> None:
    observed = {"id": dtypes.INT64, "name": dtypes.STRING, "x": dtypes.DATE}
    assert conforms(D, observed, "standard")
    assert not conforms(D, observed, "STRICT")
    with pytest.raises(ValueError):
        validate_schema(D, observed, "lenient")


def test_validation_does_not_mutate_inputs() -> None:
    observed = {"id": dtypes.INT64, "name": dtypes.STRING, "extra": dtypes.BOOLEAN}
    before = dict(observed)
    check_schema(D, observed, ValidationMode.STRICT)
    assert observed == before
    assert D.names == ("id", "name")


def test_repeated_fixes_converge() -> None:
    observed: dict[str, object] = {"name": dtypes.INT64, "extra": dtypes.BOOLEAN}
    seen = []
    while (err := check_schema(D, observed, ValidationMode.STRICT)) is not None:
        seen.append(type(err).__name__)
        if isinstance(err, MissingColumn):
            observed[err.name] = D.column(err.name).dtype
        elif isinstance(err, TypeMismatch):
            observed[err.name] = err.expected
        elif isinstance(err, ColumnCountMismatch):
            for name in err.unexpected:
                del observed[name]
    assert seen == ["MissingColumn", "TypeMismatch", "ColumnCountMismatch"]
