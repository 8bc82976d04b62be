from datetime import datetime

import pytest

from argot.exceptions import ArgumentTypeError
from argot.param_types import ParamType, coerce_arguments


# --- Tests ---
@pytest.mark.parametrize(
    "value, param_type, expected",
    [
        ("42", ParamType.INT, 42),
        ("3.5", ParamType.FLOAT, 3.5),
        ("7", ParamType.NUMERIC, 7),
        ("7.25", ParamType.NUMERIC, 7.25),
        ("yes", ParamType.BOOL, True),
        ("Off", ParamType.BOOL, False),
        ("hello", ParamType.STR, "hello"),
        ("", ParamType.STR, ""),
    ],
)
def test_coerce_basic(value, param_type, expected):
    assert param_type.coerce(value) == expected


def test_coerce_numeric_prefers_int():
    assert isinstance(ParamType.NUMERIC.coerce("10"), int)
    assert isinstance(ParamType.NUMERIC.coerce("10.0"), float)


def test_coerce_datetime():
    parsed = ParamType.DATETIME.coerce("2025-03-14 15:09")
    assert parsed == datetime(2025, 3, 14, 15, 9)


@pytest.mark.parametrize(
    "value, param_type",
    [
        ("abc", ParamType.INT),
        ("1.5", ParamType.INT),
        (True, ParamType.INT),
        ("abc", ParamType.FLOAT),
        ("abc", ParamType.NUMERIC),
        ("maybe", ParamType.BOOL),
        (42, ParamType.STR),
        ("not a date at all", ParamType.DATETIME),
    ],
)
def test_coerce_rejects(value, param_type):
    with pytest.raises(ArgumentTypeError):
        param_type.coerce(value)


def test_argument_type_error_is_type_error():
    with pytest.raises(TypeError):
        ParamType.INT.coerce("abc")


@pytest.mark.parametrize(
    "value, expected",
    [
        (int, ParamType.INT),
        (str, ParamType.STR),
        (float, ParamType.FLOAT),
        (bool, ParamType.BOOL),
        (datetime, ParamType.DATETIME),
        ("integer", ParamType.INT),
        ("String", ParamType.STR),
        ("number", ParamType.NUMERIC),
        ("boolean", ParamType.BOOL),
        ("date", ParamType.DATETIME),
        ("float", ParamType.FLOAT),
    ],
)
def test_param_type_lookup(value, expected):
    assert ParamType(value) is expected


@pytest.mark.parametrize("value", [list, "decimal", 3])
def test_param_type_lookup_invalid(value):
    with pytest.raises(ValueError):
        ParamType(value)


def test_from_annotation():
    assert ParamType.from_annotation(int) is ParamType.INT
    assert ParamType.from_annotation(list) is None
    assert str(ParamType.NUMERIC) == "numeric"


def test_coerce_arguments_passes_untyped_slots():
    values = coerce_arguments("pair", ["6", "x", "extra"], [ParamType.INT, None])
    assert values == [6, "x", "extra"]


def test_coerce_arguments_names_position():
    with pytest.raises(ArgumentTypeError) as excinfo:
        coerce_arguments("pair", ["6", "abc"], [ParamType.STR, ParamType.INT])
    assert "Argument 2 of 'pair' must be int" in str(excinfo.value)
