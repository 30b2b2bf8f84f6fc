import pytest

from logiceval import LogicEngine, OperatorRegistry, register_builtin_operators


@pytest.fixture
def registry():
    registry = OperatorRegistry()
    register_builtin_operators(registry)
    return registry


@pytest.fixture
def engine(registry):
    return LogicEngine(registry)
