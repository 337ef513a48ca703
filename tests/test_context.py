"""Tests for generator invocation."""

import pytest

from autogenerate.context import GenerationContext, Outcome, invoke
from autogenerate.errors import ContextClosedError
from autogenerate.patterns import compile_pattern
from autogenerate.rules import Rule


def _invoke(generator, glob: str = "pkg.**", name: str = "pkg.a.b"):
    pattern = compile_pattern(glob)
    rule = Rule(pattern=pattern, generator=generator)
    return invoke(rule, pattern.match(name))


def test_generator_sees_name_and_captures() -> None:
    seen = {}

    def generator(ctx: GenerationContext) -> None:
        seen["name"] = ctx.name
        seen["captures"] = ctx.captures
        seen["first"] = ctx.capture(1)

    invocation = _invoke(generator)
    assert invocation.outcome == Outcome.EMIT
    assert seen == {"name": "pkg.a.b", "captures": ("a.b",), "first": "a.b"}


def test_capture_index_starts_at_one() -> None:
    ctx = GenerationContext("x", ("a",))
    with pytest.raises(IndexError):
        ctx.capture(0)
    with pytest.raises(IndexError):
        ctx.capture(2)


def test_fragments_and_definitions_are_collected_in_order() -> None:
    def generator(ctx: GenerationContext) -> None:
        ctx.conclude_with("A = 1")
        ctx.defines("helper", len)
        ctx.conclude_with("B = 2", "C = 3")

    invocation = _invoke(generator)
    assert invocation.fragments == ["A = 1", "B = 2", "C = 3"]
    assert invocation.definitions == {"helper": len}


def test_next_rule_signal_from_nested_code() -> None:
    def helper(ctx: GenerationContext) -> None:
        ctx.next_rule()

    def generator(ctx: GenerationContext) -> None:
        ctx.conclude_with("partial = True")
        helper(ctx)
        ctx.conclude_with("unreachable = True")

    invocation = _invoke(generator)
    assert invocation.outcome == Outcome.NEXT_RULE
    assert invocation.fragments == ["partial = True"]


def test_last_rule_keeps_partial_fragments() -> None:
    def generator(ctx: GenerationContext) -> None:
        ctx.conclude_with("partial = True")
        ctx.last_rule()

    invocation = _invoke(generator)
    assert invocation.outcome == Outcome.LAST_RULE
    assert invocation.fragments == ["partial = True"]


def test_returned_outcome_is_honored() -> None:
    invocation = _invoke(lambda ctx: Outcome.NEXT_RULE)
    assert invocation.outcome == Outcome.NEXT_RULE
    assert _invoke(lambda ctx: "ignored").outcome == Outcome.EMIT


def test_errors_propagate_and_context_is_closed() -> None:
    captured = []

    def generator(ctx: GenerationContext) -> None:
        captured.append(ctx)
        raise KeyError("boom")

    with pytest.raises(KeyError):
        _invoke(generator)
    assert captured[0].closed
    with pytest.raises(ContextClosedError):
        captured[0].conclude_with("late = 1")


def test_context_is_closed_after_success() -> None:
    captured = []
    _invoke(lambda ctx: captured.append(ctx))
    assert captured[0].closed
    with pytest.raises(ContextClosedError):
        captured[0].defines("x", 1)


def test_uses_binds_top_level_package() -> None:
    ctx = GenerationContext("x")
    module = ctx.uses("os.path")
    assert module.__name__ == "os"
    assert ctx.definitions["os"] is module

    json_module = ctx.uses("json", alias="j")
    assert ctx.definitions["j"] is json_module
