from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import MalformedRuleError, RuleLoadError
from .registry import OperatorRegistry, get_default_registry
from .values import ValueKind, kind_of


def _read_json(source: Any, base_dir: str | None) -> Any:
    if not isinstance(source, (str, Path)):
        return source

    text = str(source).strip()
    if isinstance(source, str):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            if text[:1] in ("{", "["):
                raise
    path = Path(text)
    if not path.is_absolute() and base_dir:
        path = Path(base_dir) / path
    return json.loads(path.read_text(encoding="utf-8"))


def load_rule(
    source: Any,
    registry: OperatorRegistry | None = None,
    *,
    base_dir: str | None = None,
    validate: bool = True,
) -> Any:
    """Load a rule from a decoded value, JSON text, or file path.

    Args:
        source: Rule source. Can be:
            - An already-decoded rule (``dict``, ``list`` or scalar)
            - JSON text, including scalars such as ``"true"``. A ``str``
              is always parsed as JSON first.
            - A file path to a JSON file: any ``Path``, or a ``str`` that
              is not valid JSON and does not start with ``{`` or ``[``
        registry: Registry used to check operator names. If ``None``,
            uses the default registry from ``get_default_registry()``.
        base_dir: Base directory for resolving relative file paths.
        validate: If ``True`` (default), check the rule tree with
            ``validate_rule()`` before returning it.

    Returns:
        The decoded rule.

    Raises:
        RuleLoadError: If the source cannot be read or is not valid JSON.
        MalformedRuleError: If validation finds a malformed operator object.
        UnknownOperatorError: If validation finds an unregistered operator.

    Examples:
        >>> load_rule('{"var": "a"}')
        {'var': 'a'}

        >>> load_rule("rules/eligibility.json", base_dir="/app/config")
        {...}
    """
    try:
        rule = _read_json(source, base_dir)
    except (ValueError, OSError) as exc:
        raise RuleLoadError(f"Cannot load rule: {exc}") from exc

    if validate:
        validate_rule(rule, registry)
    return rule


def load_data(source: Any, *, base_dir: str | None = None) -> Any:
    """Load a data document from a decoded value, JSON text, or file path.

    ``None`` and empty text load as an empty object.

    Raises:
        RuleLoadError: If the source cannot be read or is not valid JSON.
    """
    if source is None or (isinstance(source, str) and not source.strip()):
        return {}
    try:
        return _read_json(source, base_dir)
    except (ValueError, OSError) as exc:
        raise RuleLoadError(f"Cannot load data: {exc}") from exc


def validate_rule(rule: Any, registry: OperatorRegistry | None = None) -> None:
    """Check a rule tree without evaluating it.

    Every operator object, including ones in branches that evaluation
    would skip, must have exactly one key naming a registered operator.

    Raises:
        MalformedRuleError: On an operator object with zero or several
            keys, or a node that is not a JSON value.
        UnknownOperatorError: On an unregistered operator name.
    """
    registry = registry if registry is not None else get_default_registry()
    stack = [rule]
    while stack:
        node = stack.pop()
        kind = kind_of(node)
        if kind is ValueKind.ARRAY:
            stack.extend(node)
        elif kind is ValueKind.OBJECT:
            if not isinstance(node, Mapping):
                raise MalformedRuleError(f"Unsupported rule node type: {type(node).__name__}")
            if len(node) != 1:
                raise MalformedRuleError(
                    f"Operator object must have exactly one key, got {len(node)}"
                )
            name, arg_node = next(iter(node.items()))
            registry.lookup(name)
            stack.append(arg_node)
