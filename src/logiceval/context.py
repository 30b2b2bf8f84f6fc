from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .evaluator import Operator

LogSink = Callable[[Any], None]


@dataclass
class EvaluationContext:
    """Context passed to operators during a single evaluation.

    The context stores the data document together with the operator table
    and the engine settings for one ``LogicEngine.apply()`` call. Operators
    that evaluate sub-rules against other data (``map``, ``all``, ...)
    derive a child context with ``with_data()``.

    Attributes:
        data: The data document that ``var`` and ``missing`` read from.
        operators: Immutable snapshot of the operator registry taken when
            the evaluation started. Registry changes made while an
            evaluation runs are not visible to it.
        short_circuit: When ``True``, ``if``/``and``/``or`` evaluate only
            the operands they need. When ``False`` every operand is
            evaluated before the operator runs.
        empty_string_as_data: When ``True``, a ``var`` lookup that resolves
            to ``""`` returns the whole data document.
        max_depth: Maximum operator nesting depth.
        log_sink: Callable receiving the argument of each ``log`` operator.
        depth: Current operator nesting depth.
        metrics: Counters for evaluation metrics, currently
            ``"operator_eval"`` (operators invoked). Shared with child
            contexts.
    """

    data: Any
    operators: Mapping[str, Operator]
    log_sink: LogSink
    short_circuit: bool = True
    empty_string_as_data: bool = True
    max_depth: int = 100
    depth: int = 0
    metrics: dict[str, int] = field(default_factory=dict)

    def with_data(self, data: Any) -> EvaluationContext:
        """Return a child context evaluating against ``data``.

        The child shares the operator snapshot, settings, metrics and the
        current depth with this context.
        """
        return replace(self, data=data)

    def bump(self, metric: str, amount: int = 1) -> None:
        """Increment a metric counter.

        Args:
            metric: The metric name.
            amount: The amount to increment by. Defaults to 1.
        """
        self.metrics[metric] = self.metrics.get(metric, 0) + amount
