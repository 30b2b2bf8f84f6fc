"""Runtime value tags and JavaScript-style coercion helpers.

Values are plain decoded JSON: ``None``, ``bool``, ``int``/``float``,
``str``, ``list`` and ``dict``. ``kind_of()`` gives each value an explicit
``ValueKind`` tag so operators never have to guess at types; the remaining
functions implement the permissive coercions the logic language relies on.
None of them raise: a value that cannot be coerced resolves to a default.
"""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from enum import Enum
from numbers import Number
from typing import Any

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


class ValueKind(Enum):
    """Runtime type tag of a value."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> ValueKind:
    """Classify a value.

    ``bool`` is checked before numbers since it subclasses ``int``.
    Values that are not JSON types are reported as ``OBJECT``.

    Examples:
        >>> kind_of(True)
        <ValueKind.BOOLEAN: 'boolean'>
        >>> kind_of(3)
        <ValueKind.NUMBER: 'number'>
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.OBJECT


def is_number(value: Any) -> bool:
    """Return True for int/float values, excluding ``bool``."""
    return kind_of(value) is ValueKind.NUMBER


def format_number(value: float) -> str:
    """Format a number the way JavaScript prints it.

    Fractions below 1e-6 use exponent notation without zero padding
    (``1e-7``); larger ones are written out in full.

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(0.5)
        '0.5'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(float(value))
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def _to_float(value: Any) -> float:
    # ints beyond the float range saturate, as JavaScript numbers do
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_string(value: Any) -> str:
    """Convert a value to its string form.

    Conversion rules:
        - ``None``: ``""``
        - ``bool``: ``"true"`` / ``"false"``
        - numbers: see ``format_number()``
        - ``str``: unchanged
        - lists: elements converted and joined with ``","``
        - anything else: compact JSON
    """
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return format_number(_to_float(value))
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.ARRAY:
        return ",".join(to_string(item) for item in value)
    try:
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    except (TypeError, ValueError):
        return str(value)


def parse_number(text: str) -> float | None:
    """Parse a numeric literal, returning ``None`` when it is not one.

    Surrounding whitespace is ignored. Accepts decimal and exponent forms
    plus ``Infinity``; rejects Python-only spellings such as ``"1_000"``,
    ``"nan"`` or ``"inf"``.

    Examples:
        >>> parse_number(" 4.5 ")
        4.5
        >>> parse_number("abc") is None
        True
    """
    text = text.strip()
    if text in _INFINITY:
        return _INFINITY[text]
    if _NUMBER_RE.fullmatch(text):
        return float(text)
    return None


def is_numeric(value: Any) -> bool:
    """Return True if the string form of ``value`` parses as a number."""
    return parse_number(to_string(value)) is not None


def to_number(value: Any) -> float:
    """Coerce a value to a float.

    Conversion rules:
        - numbers: ``float(value)``, saturating to ``Infinity``
        - ``bool``: ``1.0`` / ``0.0``
        - ``None``: ``0.0``
        - ``str``: parsed with ``parse_number()``; ``0.0`` on failure
        - lists and objects: their string form, parsed; ``0.0`` on failure
    """
    kind = kind_of(value)
    if kind is ValueKind.NUMBER:
        return _to_float(value)
    if kind is ValueKind.BOOLEAN:
        return 1.0 if value else 0.0
    if kind is ValueKind.NULL:
        return 0.0
    parsed = parse_number(to_string(value))
    return 0.0 if parsed is None else parsed


def truthy(value: Any) -> bool:
    """Determine whether a value counts as true.

    Truthiness rules:
        - empty list: ``True`` (unlike Python's ``bool([])``)
        - ``None`` and ``False``: ``False``
        - numbers: ``False`` for ``0`` and ``NaN``
        - ``str``: ``False`` only when empty
        - everything else: ``True``

    Examples:
        >>> truthy([])
        True
        >>> truthy("0")
        True
        >>> truthy(0)
        False
    """
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return False
    if kind is ValueKind.BOOLEAN:
        return value
    if kind is ValueKind.NUMBER:
        return not (value == 0 or math.isnan(_to_float(value)))
    if kind is ValueKind.STRING:
        return value != ""
    return True


def _equality_string(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return to_string(value)


def soft_equal(a: Any, b: Any) -> bool:
    """Loose equality used by ``==``.

    ``None`` only equals ``None``. Other operands are compared by their
    string form, with booleans written as ``"1"`` / ``"0"`` so that
    ``true == 1`` and ``10 == "10"`` both hold.
    """
    if a is None or b is None:
        return a is None and b is None
    return _equality_string(a) == _equality_string(b)


def hard_equal(a: Any, b: Any) -> bool:
    """Strict equality used by ``===``: same kind and same value.

    Lists and objects are only equal to themselves.
    """
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False
    if kind in (ValueKind.ARRAY, ValueKind.OBJECT):
        return a is b
    return a == b


def normalize_literal(value: Any) -> Any:
    """Normalize a scalar rule literal: numbers become ``float``."""
    if is_number(value) and not isinstance(value, float):
        return _to_float(value)
    return value
