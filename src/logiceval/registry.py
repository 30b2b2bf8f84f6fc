from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from . import operators as ops
from .errors import UnknownOperatorError
from .evaluator import Operator, OperatorKind

logger = logging.getLogger(__name__)

OperatorFunc = Callable[[list[Any], Any], Any]
"""Type alias for custom operator functions.

A custom operator takes the list of evaluated arguments and the data
document, and returns the operator's result.
"""


class OperatorRegistry:
    """Registry mapping operator names to ``Operator`` definitions.

    The registry is used by ``LogicEngine`` to dispatch operator objects
    found in rules. Custom operators can be added via ``register()``.

    Registration and lookup are guarded by a lock, and evaluations never
    read the registry directly: each one takes a ``snapshot()`` when it
    starts and dispatches through that for its whole duration.

    Example:
        >>> registry = OperatorRegistry()
        >>> registry.register("double", lambda args, data: args[0] * 2, min_args=1)
        >>> registry.lookup("double").name
        'double'
    """

    def __init__(self) -> None:
        """Create an empty operator registry."""
        self._operators: dict[str, Operator] = {}
        self._lock = threading.RLock()

    def register(self, name: str, fn: OperatorFunc, *, min_args: int = 0) -> None:
        """Register a custom operator.

        If an operator is already registered under ``name`` (built-in or
        custom), it is replaced.

        Args:
            name: The operator name as used in rules (e.g. ``"double"``).
            fn: A callable taking the evaluated argument list and the data
                document, and returning the result.
            min_args: Minimum number of arguments the operator requires.
        """
        self.install(Operator(name=name, fn=fn, min_args=min_args, kind=OperatorKind.VALUES))

    def install(self, operator: Operator) -> None:
        """Add an ``Operator`` definition, replacing any with the same name."""
        with self._lock:
            self._operators[operator.name] = operator
        logger.debug("Registered operator %r (%s)", operator.name, operator.kind.value)

    def unregister(self, name: str) -> None:
        """Remove an operator from the registry.

        Args:
            name: The operator to remove.

        Notes:
            Does nothing if the name is not registered.
        """
        with self._lock:
            removed = self._operators.pop(name, None)
        if removed is not None:
            logger.debug("Unregistered operator %r", name)

    def get(self, name: str) -> Operator | None:
        """Return the operator registered under ``name``, or ``None``."""
        with self._lock:
            return self._operators.get(name)

    def lookup(self, name: str) -> Operator:
        """Return the operator registered under ``name``.

        Raises:
            UnknownOperatorError: If no operator has that name.
        """
        operator = self.get(name)
        if operator is None:
            raise UnknownOperatorError(name)
        return operator

    def names(self) -> list[str]:
        """Return the registered operator names, sorted."""
        with self._lock:
            return sorted(self._operators)

    def snapshot(self) -> Mapping[str, Operator]:
        """Return a read-only copy of the current operator table."""
        with self._lock:
            return MappingProxyType(dict(self._operators))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._operators

    def __len__(self) -> int:
        with self._lock:
            return len(self._operators)


_default_registry: OperatorRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> OperatorRegistry:
    """Return the default operator registry with all built-in operators.

    The default registry is lazily initialized on first access and cached
    for subsequent calls. Operators added to it are visible to every
    engine created without an explicit registry.

    Returns:
        The shared default ``OperatorRegistry`` instance.
    """
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            registry = OperatorRegistry()
            register_builtin_operators(registry)
            _default_registry = registry
        return _default_registry


def register_builtin_operators(registry: OperatorRegistry) -> None:
    """Register all built-in operators with a registry.

    This function registers:
        - Data access: ``var``, ``missing``, ``missing_some``
        - Logic: ``if``, ``?:``, ``and``, ``or``, ``!``, ``!!``,
          ``==``, ``!=``, ``===``, ``!==``
        - Numeric: ``<``, ``<=``, ``>``, ``>=``, ``+``, ``-``, ``*``,
          ``/``, ``%``, ``max``, ``min``
        - String: ``cat``, ``in``, ``substr``
        - Array: ``merge``, ``all``, ``some``, ``none``, ``map``,
          ``filter``, ``reduce``
        - Miscellaneous: ``log``

    Args:
        registry: The ``OperatorRegistry`` to register operators with.
    """
    values, context, lazy = OperatorKind.VALUES, OperatorKind.CONTEXT, OperatorKind.LAZY
    builtins = [
        ("var", ops.op_var, 0, context),
        ("missing", ops.op_missing, 0, context),
        ("missing_some", ops.op_missing_some, 2, context),
        ("if", ops.op_if, 0, lazy),
        ("?:", ops.op_if, 0, lazy),
        ("and", ops.op_and, 0, lazy),
        ("or", ops.op_or, 0, lazy),
        ("==", ops.op_soft_equal, 2, values),
        ("!=", ops.op_soft_not_equal, 2, values),
        ("===", ops.op_hard_equal, 2, values),
        ("!==", ops.op_hard_not_equal, 2, values),
        ("!", ops.op_not, 1, values),
        ("!!", ops.op_truthy, 1, values),
        ("<", ops.op_less, 2, values),
        ("<=", ops.op_less_equal, 2, values),
        (">", ops.op_greater, 2, values),
        (">=", ops.op_greater_equal, 2, values),
        ("+", ops.op_add, 0, values),
        ("-", ops.op_subtract, 1, values),
        ("*", ops.op_multiply, 0, values),
        ("/", ops.op_divide, 2, values),
        ("%", ops.op_percent, 2, values),
        ("max", ops.op_max, 0, values),
        ("min", ops.op_min, 0, values),
        ("cat", ops.op_cat, 0, values),
        ("in", ops.op_in, 2, values),
        ("substr", ops.op_substr, 2, values),
        ("merge", ops.op_merge, 0, values),
        ("log", ops.op_log, 1, context),
        ("all", ops.op_all, 2, lazy),
        ("some", ops.op_some, 2, lazy),
        ("none", ops.op_none, 2, lazy),
        ("map", ops.op_map, 2, lazy),
        ("filter", ops.op_filter, 2, lazy),
        ("reduce", ops.op_reduce, 2, lazy),
    ]
    for name, fn, min_args, kind in builtins:
        registry.install(Operator(name=name, fn=fn, min_args=min_args, kind=kind))
