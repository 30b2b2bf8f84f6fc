"""Command-line interface for logiceval.

This module provides the CLI for evaluating logic rules from the command line.

Usage:
    python -m logiceval evaluate --rule <path-or-json> [--data <path-or-json>] [options]
    python -m logiceval operators

Commands:
    evaluate    Evaluate a rule against a JSON data document.
    operators   List the registered operator names.

Exit codes:
    0: Success
    1: The rule or data could not be loaded or evaluated
    2: Unknown command
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Any

from .engine import LogicEngine
from .errors import LogicEvalError
from .loader import load_data, load_rule
from .registry import get_default_registry


def _jsonable(value: Any) -> Any:
    """Prepare a result for printing.

    Integral floats print as integers; NaN and infinities print as
    ``null``, matching ``JSON.stringify``.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return int(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


def _cmd_evaluate(argv: list[str]) -> int:
    """Execute the 'evaluate' command.

    Args:
        argv: Command-line arguments after 'evaluate'.

    Returns:
        int: Exit code (0 on success, 1 on a load or evaluation error).
    """
    p = argparse.ArgumentParser(prog="logiceval evaluate")
    p.add_argument("--rule", required=True, help="Rule JSON file path or inline JSON")
    p.add_argument("--data", default=None, help="Data JSON file path or inline JSON")
    p.add_argument("--eager", action="store_true", help="Evaluate every operand of if/and/or")
    p.add_argument("--metrics", action="store_true", help="Print evaluation metrics to stderr")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    engine = LogicEngine(short_circuit=not args.eager)
    try:
        rule = load_rule(args.rule, engine.registry)
        data = load_data(args.data)
    except LogicEvalError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    outcome = engine.evaluate(rule, data)
    if args.metrics:
        print(json.dumps(outcome.metrics, sort_keys=True), file=sys.stderr)
    if not outcome.ok:
        print(f"error: {outcome.error}", file=sys.stderr)
        return 1

    print(json.dumps(_jsonable(outcome.value), allow_nan=False))
    return 0


def _cmd_operators(argv: list[str]) -> int:
    argparse.ArgumentParser(prog="logiceval operators").parse_args(argv)
    for name in get_default_registry().names():
        print(name)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the logiceval CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        int: Exit code.
            - 0: Success (or help shown)
            - 1: Load or evaluation error
            - 2: Unknown command
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in {"-h", "--help"}:
        print("Usage: logiceval <command> [args]\n\nCommands:\n  evaluate\n  operators")
        return 0

    cmd, rest = argv[0], argv[1:]
    if cmd == "evaluate":
        return _cmd_evaluate(rest)
    if cmd == "operators":
        return _cmd_operators(rest)

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
