"""Built-in operator implementations.

Functions here follow the calling conventions of ``OperatorKind``: the
plain ones take ``(args, data)`` with evaluated arguments, the ones that
need engine settings take ``(args, ctx)``, and the lazy ones take the
unevaluated argument nodes and a context. Arity is checked before any of
them is called, so each can index its required arguments directly.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable
from typing import Any

from .context import EvaluationContext
from .evaluator import evaluate, operand_getter
from .utils import MISSING, deep_get, has_path
from .values import (
    ValueKind,
    hard_equal,
    is_numeric,
    kind_of,
    soft_equal,
    to_number,
    to_string,
    truthy,
)

# Accessing data


def resolve_var(path: Any, fallback: Any, data: Any, *, empty_string_as_data: bool = True) -> Any:
    """Look up a dotted path in the data document.

    Args:
        path: The path. ``None`` or ``""`` selects the whole document;
            numbers are used through their string form, so ``1`` reads
            index 1 of a list document.
        fallback: Returned when the path does not resolve.
        data: The data document.
        empty_string_as_data: When ``True``, a lookup that resolves to
            ``""`` returns the whole data document instead.

    Returns:
        The resolved value, ``fallback``, or the data document.

    Examples:
        >>> resolve_var("champ.name", None, {"champ": {"name": "Fezzig"}})
        'Fezzig'
        >>> resolve_var("z", 26, {"a": 1})
        26
    """
    key = "" if path is None else to_string(path)
    if key == "":
        value = data
    else:
        value = deep_get(data, key)
        if value is MISSING:
            value = fallback
    if empty_string_as_data and isinstance(value, str) and value == "":
        return data
    return value


def op_var(args: list[Any], ctx: EvaluationContext) -> Any:
    path = args[0] if args else None
    fallback = args[1] if len(args) > 1 else None
    return resolve_var(path, fallback, ctx.data, empty_string_as_data=ctx.empty_string_as_data)


def op_missing(args: list[Any], ctx: EvaluationContext) -> list[Any]:
    """Return the keys that do not resolve in the data document.

    Keys may be given as separate arguments or as one list argument, which
    lets ``missing`` consume the output of ``merge``.
    """
    keys = args[0] if args and kind_of(args[0]) is ValueKind.ARRAY else args
    return [key for key in keys if not has_path(ctx.data, to_string(key))]


def op_missing_some(args: list[Any], ctx: EvaluationContext) -> list[Any]:
    """Return ``[]`` if at least ``args[0]`` of the keys in ``args[1]`` are present."""
    need = to_number(args[0])
    keys = args[1] if kind_of(args[1]) is ValueKind.ARRAY else [args[1]]
    missing = op_missing([keys], ctx)
    if len(keys) - len(missing) >= need:
        return []
    return missing


# Logic and boolean operations


def op_if(nodes: list[Any], ctx: EvaluationContext) -> Any:
    """Return the value paired with the first truthy condition.

    Nodes are read as ``cond, value, cond, value, ..., [else]``. Without a
    matching condition the trailing unpaired node is the result, or
    ``None`` when there is none.
    """
    operand = operand_getter(nodes, ctx)
    for index in range(0, len(nodes) - 1, 2):
        if truthy(operand(index)):
            return operand(index + 1)
    if len(nodes) % 2:
        return operand(len(nodes) - 1)
    return None


def op_and(nodes: list[Any], ctx: EvaluationContext) -> bool:
    operand = operand_getter(nodes, ctx)
    return all(truthy(operand(index)) for index in range(len(nodes)))


def op_or(nodes: list[Any], ctx: EvaluationContext) -> bool:
    operand = operand_getter(nodes, ctx)
    return any(truthy(operand(index)) for index in range(len(nodes)))


def op_soft_equal(args: list[Any], data: Any) -> bool:
    return soft_equal(args[0], args[1])


def op_soft_not_equal(args: list[Any], data: Any) -> bool:
    return not soft_equal(args[0], args[1])


def op_hard_equal(args: list[Any], data: Any) -> bool:
    return hard_equal(args[0], args[1])


def op_hard_not_equal(args: list[Any], data: Any) -> bool:
    return not hard_equal(args[0], args[1])


def op_not(args: list[Any], data: Any) -> bool:
    return not truthy(args[0])


def op_truthy(args: list[Any], data: Any) -> bool:
    return truthy(args[0])


# Numeric operations


def _chain(values: list[Any], compare: Callable[[float, float], bool]) -> bool:
    # Every operand must look numeric; otherwise the comparison is False.
    if not all(is_numeric(value) for value in values):
        return False
    numbers = [to_number(value) for value in values]
    return all(compare(left, right) for left, right in zip(numbers, numbers[1:]))


def op_less(args: list[Any], data: Any) -> bool:
    """``a < b``, or with three arguments the exclusive between ``a < b < c``."""
    return _chain(args[:3], operator.lt)


def op_less_equal(args: list[Any], data: Any) -> bool:
    """``a <= b``, or with three arguments the inclusive between ``a <= b <= c``."""
    return _chain(args[:3], operator.le)


def op_greater(args: list[Any], data: Any) -> bool:
    return _chain([args[1], args[0]], operator.lt)


def op_greater_equal(args: list[Any], data: Any) -> bool:
    return _chain([args[1], args[0]], operator.le)


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def op_add(args: list[Any], data: Any) -> float:
    return sum((to_number(value) for value in args), 0.0)


def op_subtract(args: list[Any], data: Any) -> float:
    first = to_number(args[0])
    if len(args) == 1:
        return -first
    for value in args[1:]:
        first -= to_number(value)
    return first


def op_multiply(args: list[Any], data: Any) -> float:
    return math.prod((to_number(value) for value in args), start=1.0)


def op_divide(args: list[Any], data: Any) -> float:
    return _divide(to_number(args[0]), to_number(args[1]))


def op_percent(args: list[Any], data: Any) -> float:
    """What percentage ``args[0]`` is of ``args[1]``: ``{"%": [20, 50]}`` is 40."""
    return _divide(to_number(args[0]) * 100, to_number(args[1]))


def op_max(args: list[Any], data: Any) -> float:
    return max((to_number(value) for value in args), default=0.0)


def op_min(args: list[Any], data: Any) -> float:
    return min((to_number(value) for value in args), default=0.0)


# String operations


def op_cat(args: list[Any], data: Any) -> str:
    return "".join(to_string(value) for value in args)


def op_in(args: list[Any], data: Any) -> bool:
    """Membership in a list, or substring of a string."""
    needle, haystack = args[0], args[1]
    kind = kind_of(haystack)
    if kind is ValueKind.ARRAY:
        return any(hard_equal(needle, item) for item in haystack)
    if kind in (ValueKind.NULL, ValueKind.OBJECT):
        return False
    return to_string(needle) in to_string(haystack)


def _to_offset(value: Any, size: int) -> int:
    number = to_number(value)
    if math.isnan(number):
        return 0
    return int(max(-size, min(size, number)))


def op_substr(args: list[Any], data: Any) -> str:
    """Slice a string by start and optional length.

    A negative start counts from the end. A negative length drops that many
    characters from the end; a positive length is counted from the start.
    Offsets are clamped to the string, so this never raises.

    Examples:
        ``{"substr": ["jsonlogic", 4]}`` -> ``"logic"``
        ``{"substr": ["jsonlogic", -5]}`` -> ``"logic"``
        ``{"substr": ["jsonlogic", 4, -2]}`` -> ``"log"``
    """
    text = to_string(args[0])
    size = len(text)
    start = _to_offset(args[1], size)
    if start < 0:
        start += size
    if len(args) < 3:
        end = size
    else:
        length = _to_offset(args[2], size)
        end = size + length if length < 0 else start + length
    end = max(start, min(end, size))
    return text[start:end]


# Miscellaneous


def op_merge(args: list[Any], data: Any) -> list[Any]:
    merged: list[Any] = []
    for value in args:
        if kind_of(value) is ValueKind.ARRAY:
            merged.extend(value)
        else:
            merged.append(value)
    return merged


def op_log(args: list[Any], ctx: EvaluationContext) -> Any:
    ctx.log_sink(args[0])
    return args[0]


# Array operations
#
# The first node evaluates to the list to scan; the second is a sub-rule
# evaluated once per element with that element as the data document.


def _items(nodes: list[Any], ctx: EvaluationContext) -> list[Any]:
    items = evaluate(nodes[0], ctx)
    if kind_of(items) is ValueKind.ARRAY:
        return list(items)
    return []


def op_all(nodes: list[Any], ctx: EvaluationContext) -> bool:
    items = _items(nodes, ctx)
    if not items:
        return False
    return all(truthy(evaluate(nodes[1], ctx.with_data(item))) for item in items)


def op_some(nodes: list[Any], ctx: EvaluationContext) -> bool:
    items = _items(nodes, ctx)
    return any(truthy(evaluate(nodes[1], ctx.with_data(item))) for item in items)


def op_none(nodes: list[Any], ctx: EvaluationContext) -> bool:
    return not op_some(nodes, ctx)


def op_map(nodes: list[Any], ctx: EvaluationContext) -> list[Any]:
    return [evaluate(nodes[1], ctx.with_data(item)) for item in _items(nodes, ctx)]


def op_filter(nodes: list[Any], ctx: EvaluationContext) -> list[Any]:
    return [item for item in _items(nodes, ctx) if truthy(evaluate(nodes[1], ctx.with_data(item)))]


def op_reduce(nodes: list[Any], ctx: EvaluationContext) -> Any:
    """Fold a list with a sub-rule reading ``current`` and ``accumulator``.

    The optional third node is the initial accumulator (``None`` if absent).
    """
    items = _items(nodes, ctx)
    accumulator = evaluate(nodes[2], ctx) if len(nodes) > 2 else None
    for item in items:
        accumulator = evaluate(nodes[1], ctx.with_data({"current": item, "accumulator": accumulator}))
    return accumulator
