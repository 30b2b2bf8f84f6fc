"""logiceval - An evaluator for JSON-encoded logic rules.

logiceval evaluates JsonLogic-style rules: a rule is a decoded JSON value
where every operator is an object with a single key, and evaluation reads
variables from a separate data document. The operator set can be extended
at runtime.

Quick Start:
    >>> from logiceval import apply
    >>> apply({"var": "a"}, {"a": 1, "b": 2})
    1
    >>> apply({"if": [{"<": [{"var": "temp"}, 0]}, "freezing", "liquid"]}, {"temp": 5})
    'liquid'

Main Components:
    - LogicEngine: Evaluates rules; holds the registry and settings
    - apply() / run(): Evaluate with the default engine
    - add_operator() / remove_operator(): Extend the default registry
    - Outcome: ``(value, error)`` result of ``LogicEngine.evaluate()``
    - OperatorRegistry: Registry of operators
    - load_rule() / load_data(): Load rules and data from JSON text or files

Built-in Operators:
    - Data: var, missing, missing_some
    - Logic: if, ?:, and, or, !, !!, ==, !=, ===, !==
    - Numeric: <, <=, >, >=, +, -, *, /, %, max, min
    - String: cat, in, substr
    - Array: merge, all, some, none, map, filter, reduce
    - Miscellaneous: log

Exceptions:
    - MalformedRuleError: Operator object without exactly one key
    - NestingDepthError: Rule nested deeper than the engine allows
    - RuleLoadError: Rule or data JSON could not be loaded
    - UnknownOperatorError: Operator not registered
    - ArityError: Operator received too few arguments
    - OperatorError: A custom operator function raised
"""

from .engine import LogicEngine, Outcome, add_operator, apply, get_default_engine, remove_operator, run
from .errors import (
    ArityError,
    LogicEvalError,
    MalformedRuleError,
    NestingDepthError,
    OperatorError,
    RuleLoadError,
    UnknownOperatorError,
)
from .evaluator import Operator, OperatorKind
from .loader import load_data, load_rule, validate_rule
from .registry import OperatorRegistry, get_default_registry, register_builtin_operators
from .values import ValueKind, kind_of

__all__ = [
    "ArityError",
    "LogicEngine",
    "LogicEvalError",
    "MalformedRuleError",
    "NestingDepthError",
    "Operator",
    "OperatorError",
    "OperatorKind",
    "OperatorRegistry",
    "Outcome",
    "RuleLoadError",
    "UnknownOperatorError",
    "ValueKind",
    "add_operator",
    "apply",
    "get_default_engine",
    "get_default_registry",
    "kind_of",
    "load_data",
    "load_rule",
    "register_builtin_operators",
    "remove_operator",
    "run",
    "validate_rule",
]
