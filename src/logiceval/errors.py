from __future__ import annotations


class LogicEvalError(Exception):
    """Base exception for all logiceval errors.

    All other exceptions in this package inherit from this class,
    allowing callers to catch all evaluation failures with a single
    except clause.
    """


class MalformedRuleError(LogicEvalError):
    """Raised when a rule node is not a well-formed logic expression.

    Common causes:
        - Operator object with zero keys or more than one key
        - A rule node that is not a JSON value (e.g. a ``set``)
    """


class NestingDepthError(MalformedRuleError):
    """Raised when a rule nests operators deeper than the engine allows."""


class RuleLoadError(MalformedRuleError):
    """Raised when a rule or data document cannot be loaded.

    Common causes:
        - Invalid JSON syntax in the source text
        - File not found or unreadable
        - Unsupported source type passed to ``load_rule()``
    """


class UnknownOperatorError(LogicEvalError):
    """Raised when a rule references an operator that is not registered.

    Attributes:
        name: The unknown operator name.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown operator '{name}'")
        self.name = name


class ArityError(LogicEvalError):
    """Raised when an operator receives fewer arguments than it requires.

    Attributes:
        operator: The operator name.
        expected: Minimum number of arguments.
        received: Number of arguments actually supplied.
    """

    def __init__(self, operator: str, expected: int, received: int) -> None:
        super().__init__(
            f"Operator '{operator}' expects at least {expected} argument(s), got {received}"
        )
        self.operator = operator
        self.expected = expected
        self.received = received


class OperatorError(LogicEvalError):
    """Raised when a custom operator function fails during evaluation.

    The original exception is available as ``__cause__``.

    Attributes:
        operator: Name of the failing operator.
    """

    def __init__(self, operator: str, message: str) -> None:
        super().__init__(f"Operator '{operator}' failed: {message}")
        self.operator = operator
