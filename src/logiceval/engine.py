from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .context import EvaluationContext, LogSink
from .errors import LogicEvalError
from .evaluator import evaluate
from .registry import OperatorFunc, OperatorRegistry, get_default_registry
from .values import to_string

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


def print_sink(value: Any) -> None:
    """Default ``log`` sink: print the value's string form to stdout."""
    print(to_string(value))


@dataclass(frozen=True)
class Outcome:
    """The result of ``LogicEngine.evaluate()``.

    This is a frozen (immutable) dataclass pairing the evaluation result
    with the error that stopped it, if any.

    Attributes:
        value: The evaluation result. ``False`` when ``error`` is set.
        error: The ``LogicEvalError`` raised during evaluation, or ``None``
            on success.
        metrics: Counters collected during evaluation, e.g.
            ``{"operator_eval": 3}``.
    """

    value: Any
    error: LogicEvalError | None = None
    metrics: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the evaluation finished without an error."""
        return self.error is None


class LogicEngine:
    """Evaluates logic rules against data documents.

    The engine is the main entry point for evaluation. It owns the operator
    registry and the settings copied into every ``EvaluationContext``.

    Attributes:
        registry: The ``OperatorRegistry`` used for dispatching operators.
        short_circuit: Default evaluation mode of ``if``/``and``/``or``.
        max_depth: Maximum operator nesting depth.
        empty_string_as_data: Whether ``var`` lookups resolving to ``""``
            return the whole data document.
        log_sink: Callable receiving the argument of each ``log`` operator.

    Example:
        >>> from logiceval import LogicEngine
        >>> engine = LogicEngine()
        >>> engine.apply({"var": "a"}, {"a": 1, "b": 2})
        1
    """

    def __init__(
        self,
        registry: OperatorRegistry | None = None,
        *,
        short_circuit: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
        empty_string_as_data: bool = True,
        log_sink: LogSink | None = None,
    ) -> None:
        """Initialize a logic engine.

        Args:
            registry: Operator registry. If ``None``, uses the default
                registry from ``get_default_registry()``.
            short_circuit: If ``True`` (default), ``if``, ``?:``, ``and``
                and ``or`` only evaluate the operands they need. If
                ``False``, every operand is evaluated first, so branches
                that are not taken still run (including their ``log``
                calls).
            max_depth: Maximum operator nesting depth. Deeper rules raise
                ``NestingDepthError``.
            empty_string_as_data: If ``True`` (default), a ``var`` lookup
                resolving to ``""`` returns the whole data document.
            log_sink: Callable receiving each ``log`` argument. Defaults to
                printing to stdout.
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.short_circuit = short_circuit
        self.max_depth = max_depth
        self.empty_string_as_data = empty_string_as_data
        self.log_sink = log_sink or print_sink

    def _context(self, data: Any) -> EvaluationContext:
        if data is None or (isinstance(data, str) and data == ""):
            data = {}
        return EvaluationContext(
            data=data,
            operators=self.registry.snapshot(),
            log_sink=self.log_sink,
            short_circuit=self.short_circuit,
            empty_string_as_data=self.empty_string_as_data,
            max_depth=self.max_depth,
        )

    def apply(self, rule: Any, data: Any = None) -> Any:
        """Evaluate a rule against a data document.

        Args:
            rule: The decoded rule (dicts, lists and scalars).
            data: The decoded data document. ``None`` or ``""`` means an
                empty object.

        Returns:
            The evaluation result.

        Raises:
            MalformedRuleError: If the rule is not well-formed.
            UnknownOperatorError: If the rule uses an unregistered operator.
            ArityError: If an operator receives too few arguments.
            OperatorError: If a custom operator function raised.

        Examples:
            >>> LogicEngine().apply({"<": [1, 2, 3]})
            True
        """
        return evaluate(rule, self._context(data))

    def run(self, rule: Any) -> Any:
        """Evaluate a rule against an empty data document."""
        return self.apply(rule, {})

    def evaluate(self, rule: Any, data: Any = None) -> Outcome:
        """Evaluate a rule and capture the error instead of raising it.

        This is the ``(result, error)`` form of ``apply()``: any
        ``LogicEvalError`` is returned in ``Outcome.error`` with
        ``Outcome.value`` set to ``False``.

        Args:
            rule: The decoded rule.
            data: The decoded data document.

        Returns:
            An ``Outcome`` with the value, error and collected metrics.
        """
        ctx = self._context(data)
        try:
            value = evaluate(rule, ctx)
        except LogicEvalError as exc:
            logger.debug("Rule evaluation failed: %s", exc)
            return Outcome(value=False, error=exc, metrics=dict(ctx.metrics))
        return Outcome(value=value, metrics=dict(ctx.metrics))

    def add_operator(self, name: str, fn: OperatorFunc, *, min_args: int = 0) -> None:
        """Register a custom operator on this engine's registry.

        Args:
            name: The operator name used in rules.
            fn: A callable taking the evaluated argument list and the data
                document.
            min_args: Minimum number of arguments.
        """
        self.registry.register(name, fn, min_args=min_args)

    def remove_operator(self, name: str) -> None:
        """Remove an operator from this engine's registry."""
        self.registry.unregister(name)


_default_engine: LogicEngine | None = None


def get_default_engine() -> LogicEngine:
    """Return the shared engine bound to the default registry."""
    global _default_engine
    if _default_engine is None:
        _default_engine = LogicEngine()
    return _default_engine


def apply(rule: Any, data: Any = None) -> Any:
    """Evaluate ``rule`` against ``data`` with the default engine."""
    return get_default_engine().apply(rule, data)


def run(rule: Any) -> Any:
    """Evaluate ``rule`` against an empty data document with the default engine."""
    return get_default_engine().run(rule)


def add_operator(name: str, fn: OperatorFunc, *, min_args: int = 0) -> None:
    """Register a custom operator on the default registry."""
    get_default_registry().register(name, fn, min_args=min_args)


def remove_operator(name: str) -> None:
    """Remove an operator from the default registry."""
    get_default_registry().unregister(name)
