"""Recursive rule evaluation.

``evaluate()`` walks a rule tree depth-first. Operator objects are
dispatched through the context's operator snapshot, arrays are evaluated
element by element and scalar literals evaluate to themselves.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .context import EvaluationContext
from .errors import (
    ArityError,
    LogicEvalError,
    MalformedRuleError,
    NestingDepthError,
    OperatorError,
    UnknownOperatorError,
)
from .values import ValueKind, kind_of, normalize_literal


class OperatorKind(Enum):
    """Calling convention of an operator function.

    - ``VALUES``: ``fn(args, data)`` with fully evaluated arguments.
    - ``CONTEXT``: ``fn(args, ctx)`` with fully evaluated arguments.
    - ``LAZY``: ``fn(nodes, ctx)`` with unevaluated argument nodes; the
      function evaluates them itself through ``evaluate()``.
    """

    VALUES = "values"
    CONTEXT = "context"
    LAZY = "lazy"


@dataclass(frozen=True)
class Operator:
    """A named operator.

    Attributes:
        name: Operator name as it appears in rules (e.g. ``"=="``).
        fn: The implementation. Its signature depends on ``kind``.
        min_args: Minimum number of arguments. Fewer raises ``ArityError``.
        kind: Calling convention, see ``OperatorKind``.
    """

    name: str
    fn: Callable[..., Any]
    min_args: int = 0
    kind: OperatorKind = OperatorKind.VALUES

    def invoke(self, arg_node: Any, ctx: EvaluationContext) -> Any:
        """Resolve the argument position ``arg_node`` and run the operator."""
        if self.kind is OperatorKind.LAZY:
            operands = argument_nodes(arg_node)
        else:
            operands = resolve_args(arg_node, ctx)
        if len(operands) < self.min_args:
            raise ArityError(self.name, self.min_args, len(operands))

        ctx.bump("operator_eval")
        try:
            if self.kind is OperatorKind.VALUES:
                return self.fn(operands, ctx.data)
            return self.fn(operands, ctx)
        except LogicEvalError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise OperatorError(self.name, str(exc)) from exc


def argument_nodes(arg_node: Any) -> list[Any]:
    """Return the argument nodes of an operator's argument position.

    An array is the argument list itself; any other node is shorthand
    for a one-element list, so ``{"var": "a"}`` means ``{"var": ["a"]}``.
    """
    if isinstance(arg_node, (list, tuple)):
        return list(arg_node)
    return [arg_node]


def resolve_args(arg_node: Any, ctx: EvaluationContext) -> list[Any]:
    """Evaluate every argument node, left to right."""
    return [evaluate(node, ctx) for node in argument_nodes(arg_node)]


def _descend(ctx: EvaluationContext) -> None:
    if ctx.depth >= ctx.max_depth:
        raise NestingDepthError(f"Rule nesting exceeds maximum depth of {ctx.max_depth}")
    ctx.depth += 1


def evaluate(node: Any, ctx: EvaluationContext) -> Any:
    """Evaluate a rule node.

    Args:
        node: The rule node: an operator object (one key), an array or a
            scalar literal.
        ctx: The evaluation context.

    Returns:
        The resulting value.

    Raises:
        MalformedRuleError: If an operator object does not have exactly
            one key, or the node is not a JSON value.
        NestingDepthError: If operators or arrays nest deeper than
            ``ctx.max_depth``.
        UnknownOperatorError: If the operator is not registered.
        ArityError: If an operator receives too few arguments.
        OperatorError: If an operator function raised.
    """
    kind = kind_of(node)
    if kind is ValueKind.ARRAY:
        _descend(ctx)
        try:
            return [evaluate(item, ctx) for item in node]
        finally:
            ctx.depth -= 1
    if kind is ValueKind.OBJECT:
        if not isinstance(node, Mapping):
            raise MalformedRuleError(f"Unsupported rule node type: {type(node).__name__}")
        if len(node) != 1:
            raise MalformedRuleError(
                f"Operator object must have exactly one key, got {len(node)}: {sorted(map(str, node))}"
            )
        name, arg_node = next(iter(node.items()))
        operator = ctx.operators.get(name)
        if operator is None:
            raise UnknownOperatorError(name)

        _descend(ctx)
        try:
            return operator.invoke(arg_node, ctx)
        finally:
            ctx.depth -= 1
    return normalize_literal(node)


def operand_getter(nodes: list[Any], ctx: EvaluationContext) -> Callable[[int], Any]:
    """Return a function giving the evaluated operand at an index.

    With ``ctx.short_circuit`` operands are evaluated on demand, each time
    they are requested. Otherwise all operands are evaluated up front, in
    order, and the function only indexes the results.
    """
    if ctx.short_circuit:
        return lambda index: evaluate(nodes[index], ctx)
    values = [evaluate(node, ctx) for node in nodes]
    return values.__getitem__
