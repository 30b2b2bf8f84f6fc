import math

import pytest

from logiceval import (
    ArityError,
    LogicEngine,
    MalformedRuleError,
    NestingDepthError,
    OperatorError,
    UnknownOperatorError,
    add_operator,
    apply,
    remove_operator,
    run,
)


def test_var_reads_data():
    assert apply({"var": "a"}, {"a": 1, "b": 2}) == 1


def test_var_fallback_when_path_absent():
    assert apply({"var": ["z", 26]}, {"a": 1}) == 26


def test_var_dotted_path():
    assert apply({"var": "champ.name"}, {"champ": {"name": "Fezzig"}}) == "Fezzig"


def test_between_operators():
    assert run({"<": [1, 2, 3]}) is True
    assert run({"<": [1, 1, 3]}) is False
    assert run({"<=": [1, 1, 3]}) is True


def test_arithmetic_sugar():
    assert run({"+": [2, 2, 2, 2, 2]}) == 10
    assert run({"-": 2}) == -2
    assert run({"-": -2}) == 2


def test_substr():
    assert run({"substr": ["jsonlogic", 4]}) == "logic"
    assert run({"substr": ["jsonlogic", -5]}) == "logic"
    assert run({"substr": ["jsonlogic", 4, -2]}) == "log"


def test_soft_and_hard_equality():
    assert run({"==": [10, "10"]}) is True
    assert run({"===": [10, "10"]}) is False


def test_and_or_fold_booleans():
    assert run({"and": [True, True, False]}) is False
    assert run({"or": [False, False, True]}) is True


def test_missing_data_defaults_to_empty_object(engine):
    assert engine.apply({"var": ""}) == {}
    assert engine.apply({"var": ""}, "") == {}


def test_literal_rules_evaluate_to_themselves(engine):
    assert engine.run("hello") == "hello"
    assert engine.run(None) is None
    assert engine.run([1, {"+": [1, 1]}]) == [1, 2]


def test_nested_rule(engine):
    rule = {
        "if": [
            {"and": [{"<": [{"var": "score"}, 3]}, {"!=": [{"var": "score"}, "N/A"]}]},
            "review",
            "ok",
        ]
    }
    assert engine.apply(rule, {"score": "2"}) == "review"
    assert engine.apply(rule, {"score": "N/A"}) == "ok"
    assert engine.apply(rule, {"score": 4}) == "ok"


def test_repeated_evaluation_is_idempotent(engine):
    rule = {"cat": [{"var": "a"}, {"+": [1, {"var": "b"}]}]}
    data = {"a": "x", "b": 2}
    assert engine.apply(rule, data) == engine.apply(rule, data) == "x3"


def test_malformed_operator_objects(engine):
    with pytest.raises(MalformedRuleError):
        engine.run({"var": "a", "cat": []})
    with pytest.raises(MalformedRuleError):
        engine.run({})
    with pytest.raises(MalformedRuleError):
        engine.run({"!!": [{1, 2}]})


def test_unknown_operator_is_an_error(engine):
    with pytest.raises(UnknownOperatorError) as info:
        engine.run({"if": [True, {"nope": [1]}, 0]})
    assert info.value.name == "nope"


def test_arity_error_from_nested_operator(engine):
    with pytest.raises(ArityError) as info:
        engine.run({"+": [1, {"==": [1]}]})
    assert info.value.operator == "=="
    assert info.value.expected == 2
    assert info.value.received == 1


def test_evaluate_returns_outcome(engine):
    outcome = engine.evaluate({"+": [1, 2]})
    assert outcome.ok
    assert outcome.value == 3
    assert outcome.metrics["operator_eval"] == 1

    failed = engine.evaluate({"nope": []})
    assert not failed.ok
    assert failed.value is False
    assert isinstance(failed.error, UnknownOperatorError)


def test_short_circuit_skips_untaken_branches(registry):
    logged = []
    engine = LogicEngine(registry, log_sink=logged.append)
    assert engine.run({"if": [True, "yes", {"log": "else"}]}) == "yes"
    assert engine.run({"and": [False, {"nope": 1}]}) is False
    assert engine.run({"or": [True, {"nope": 1}]}) is True
    assert logged == []


def test_eager_mode_evaluates_every_operand(registry):
    logged = []
    engine = LogicEngine(registry, short_circuit=False, log_sink=logged.append)
    assert engine.run({"if": [True, "yes", {"log": "else"}]}) == "yes"
    assert logged == ["else"]
    with pytest.raises(UnknownOperatorError):
        engine.run({"and": [False, {"nope": 1}]})


def test_log_default_sink_prints(engine, capsys):
    assert engine.run({"log": "apple"}) == "apple"
    assert capsys.readouterr().out == "apple\n"


def _nested(depth):
    rule = True
    for _ in range(depth):
        rule = {"!!": rule}
    return rule


def test_nesting_depth_is_bounded(registry):
    with pytest.raises(NestingDepthError):
        LogicEngine(registry).run(_nested(101))
    assert LogicEngine(registry).run(_nested(100)) is True
    assert LogicEngine(registry, max_depth=200).run(_nested(150)) is True


def test_nesting_depth_error_is_malformed_rule():
    assert issubclass(NestingDepthError, MalformedRuleError)


def _nested_arrays(depth):
    rule = 1
    for _ in range(depth):
        rule = [rule]
    return rule


def test_array_nesting_counts_toward_depth(engine):
    deep = _nested_arrays(5000)
    with pytest.raises(NestingDepthError):
        engine.run(deep)
    with pytest.raises(NestingDepthError):
        engine.run({"!!": [deep]})
    outcome = engine.evaluate({"!!": [deep]})
    assert isinstance(outcome.error, NestingDepthError)
    assert outcome.value is False
    assert engine.run(_nested_arrays(50)) == _nested_arrays(50)


def test_numbers_beyond_float_range(engine):
    huge = 10**400
    assert engine.run({"+": [huge, 1]}) == math.inf
    assert engine.apply({"+": [{"var": "a"}, 1]}, {"a": huge}) == math.inf
    assert engine.apply({"<": [1, {"var": "a"}]}, {"a": huge}) is True
    assert engine.run({"-": [-huge]}) == math.inf


def test_custom_operator(engine):
    engine.add_operator("plus_one", lambda args, data: args[0] + 1, min_args=1)
    assert engine.run({"plus_one": 2}) == 3
    with pytest.raises(ArityError):
        engine.run({"plus_one": []})

    engine.remove_operator("plus_one")
    with pytest.raises(UnknownOperatorError):
        engine.run({"plus_one": 2})


def test_custom_operator_receives_data(engine):
    engine.add_operator("has_key", lambda args, data: args[0] in data, min_args=1)
    assert engine.apply({"has_key": "a"}, {"a": 0}) is True


def test_custom_operator_overrides_builtin(engine):
    engine.add_operator("cat", lambda args, data: "-".join(args))
    assert engine.run({"cat": ["a", "b"]}) == "a-b"


def test_custom_operator_failure_is_wrapped(engine):
    def boom(args, data):
        raise RuntimeError("kaput")

    engine.add_operator("boom", boom)
    with pytest.raises(OperatorError) as info:
        engine.run({"boom": []})
    assert info.value.operator == "boom"
    assert isinstance(info.value.__cause__, RuntimeError)


def test_engines_with_separate_registries_are_isolated(registry):
    first = LogicEngine(registry)
    second = LogicEngine()
    first.add_operator("only_here", lambda args, data: True)
    assert first.run({"only_here": []}) is True
    with pytest.raises(UnknownOperatorError):
        second.run({"only_here": []})


def test_registration_during_evaluation_is_not_visible(engine):
    def define(args, data):
        engine.add_operator("late", lambda a, d: "late")
        return True

    engine.add_operator("define", define)
    with pytest.raises(UnknownOperatorError):
        engine.run({"and": [{"define": []}, {"late": []}]})
    assert engine.run({"late": []}) == "late"


def test_module_level_operator_registration():
    add_operator("shout", lambda args, data: str(args[0]).upper(), min_args=1)
    try:
        assert run({"shout": "hi"}) == "HI"
    finally:
        remove_operator("shout")
    with pytest.raises(UnknownOperatorError):
        run({"shout": "hi"})
