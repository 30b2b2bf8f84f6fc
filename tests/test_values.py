import math

import pytest

from logiceval.values import (
    ValueKind,
    hard_equal,
    is_numeric,
    kind_of,
    normalize_literal,
    parse_number,
    soft_equal,
    to_number,
    to_string,
    truthy,
)


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, ValueKind.NULL),
        (False, ValueKind.BOOLEAN),
        (0, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        ("", ValueKind.STRING),
        ([], ValueKind.ARRAY),
        ({}, ValueKind.OBJECT),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) is kind


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        (True, "true"),
        (2.0, "2"),
        (-3, "-3"),
        (0.5, "0.5"),
        (1e-7, "1e-7"),
        (-1.5e-7, "-1.5e-7"),
        (1e-5, "0.00001"),
        (2.5e-6, "0.0000025"),
        (1e21, "1e+21"),
        (1.5e300, "1.5e+300"),
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        ("abc", "abc"),
        ([1, "a", None], "1,a,"),
        ({"b": 1, "a": 2}, '{"a":2,"b":1}'),
    ],
)
def test_to_string(value, expected):
    assert to_string(value) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("4", 4.0),
        (" 4.5 ", 4.5),
        ("-.5", -0.5),
        ("1e3", 1000.0),
        ("Infinity", math.inf),
        ("", None),
        ("abc", None),
        ("1_000", None),
        ("nan", None),
        ("0x10", None),
    ],
)
def test_parse_number(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, 3.0),
        ("3.5", 3.5),
        ("abc", 0.0),
        (True, 1.0),
        (False, 0.0),
        (None, 0.0),
        ([], 0.0),
        ([7], 7.0),
        ({"a": 1}, 0.0),
    ],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, True),
        ("10", True),
        (" 2 ", True),
        ("abc", False),
        (None, False),
        (True, False),
        (math.nan, False),
    ],
)
def test_is_numeric(value, expected):
    assert is_numeric(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ([], True),
        ([0], True),
        ({}, True),
        ("0", True),
        ("a", True),
        (-1, True),
        (0, False),
        (0.0, False),
        (math.nan, False),
        ("", False),
        (None, False),
        (False, False),
    ],
)
def test_truthy(value, expected):
    assert truthy(value) is expected


def test_soft_equal():
    assert soft_equal(10, "10")
    assert soft_equal(1.0, 1)
    assert soft_equal(True, 1)
    assert soft_equal(False, "0")
    assert soft_equal(None, None)
    assert not soft_equal(None, "")
    assert not soft_equal(None, 0)
    assert not soft_equal(1, "1.0")


def test_hard_equal():
    shared = [1]
    assert hard_equal(1, 1.0)
    assert hard_equal("a", "a")
    assert hard_equal(None, None)
    assert hard_equal(shared, shared)
    assert not hard_equal(10, "10")
    assert not hard_equal(True, 1)
    assert not hard_equal([1], [1])
    assert not hard_equal(math.nan, math.nan)


def test_integers_beyond_float_range_saturate():
    huge = 10**400
    assert to_number(huge) == math.inf
    assert to_number(-huge) == -math.inf
    assert to_string(huge) == "Infinity"
    assert to_string(-huge) == "-Infinity"
    assert normalize_literal(huge) == math.inf
    assert truthy(huge)
    assert soft_equal(huge, "Infinity")
