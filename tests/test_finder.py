"""Tests for importing generated modules through sys.meta_path."""

import importlib
import importlib.util
import inspect
import sys

import pytest

from autogenerate import AutoGenerator, GenerationContext, autogenerated, requiring
from autogenerate.constants import COMPLETE_MARKER, PARENT_PACKAGE_MARKER
from autogenerate.emitter import emit
from autogenerate.finder import AutoGenerateFinder, GeneratedModuleLoader, unit_spec


class Classes(AutoGenerator):
    @requiring("agen_some.**.Class")
    def middle_names(ctx: GenerationContext) -> None:
        ctx.conclude_with(
            f"""
            def print_my_middle_names():
                return {ctx.capture(1)!r}
            """
        )


class Prefixed(AutoGenerator):
    @requiring("**")
    def anything(ctx: GenerationContext) -> None:
        ctx.defines("made_by", type(ctx.loader).__name__)


def test_import_generated_module() -> None:
    Classes()
    module = importlib.import_module("agen_some.Freaking.Class")
    assert module.print_my_middle_names() == "Freaking"
    assert getattr(module, COMPLETE_MARKER) is True

    deeper = importlib.import_module("agen_some.Other.Freaking.Class")
    assert deeper.print_my_middle_names() == "Other.Freaking"
    assert autogenerated("agen_some.Other.Freaking.Class")


def test_parent_packages_are_synthesized_but_not_recorded() -> None:
    Classes()
    importlib.import_module("agen_some.Freaking.Class")
    parent = sys.modules["agen_some.Freaking"]
    assert getattr(parent, PARENT_PACKAGE_MARKER) is True
    assert not autogenerated("agen_some.Freaking")


def test_unmatched_import_still_fails() -> None:
    Classes()
    with pytest.raises(ModuleNotFoundError):
        importlib.import_module("agen_other.Freaking.Class")


def test_match_only_loaders_resolve_disjoint_names() -> None:
    first = Prefixed(match_only="agen_prefix1.**")
    second = Prefixed(match_only="agen_prefix2.**")

    module = importlib.import_module("agen_prefix1.Thing")
    assert module.made_by == "Prefixed"
    assert first.autogenerator_of("agen_prefix1.Thing") is first
    assert second.autogenerator_of("agen_prefix1.Thing") is first

    with pytest.raises(ModuleNotFoundError):
        importlib.import_module("agen_prefix3.Thing")


def test_generator_error_surfaces_from_import() -> None:
    def broken(ctx: GenerationContext) -> None:
        raise ValueError("no such table")

    AutoGenerator(rules=[("agen_broken", broken)])
    with pytest.raises(ValueError, match="no such table"):
        importlib.import_module("agen_broken")


def test_fragment_syntax_error_surfaces_on_import() -> None:
    AutoGenerator(rules=[("agen_syntax", lambda ctx: ctx.conclude_with("def ("))])
    with pytest.raises(SyntaxError):
        importlib.import_module("agen_syntax")


def test_real_modules_take_precedence() -> None:
    calls = []
    AutoGenerator(rules=[("json", calls.append)])
    importlib.import_module("json")
    assert calls == []


def test_find_spec_returns_none_when_not_handled() -> None:
    finder = AutoGenerateFinder(Classes(install=False))
    assert finder.find_spec("agen_unrelated") is None


def test_generated_source_is_inspectable() -> None:
    Classes()
    module = importlib.import_module("agen_some.Source.Class")
    source = inspect.getsource(module.print_my_middle_names)
    assert "return 'Source'" in source


def test_module_loader_binds_definitions_before_body() -> None:
    unit = emit("agen_direct", ["DOUBLED = base * 2"], definitions={"base": 21})
    spec = unit_spec(unit)
    assert isinstance(spec.loader, GeneratedModuleLoader)
    assert spec.submodule_search_locations == []

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    assert module.DOUBLED == 42
    assert spec.loader.get_source("agen_direct") == unit.source


def test_leading_multi_wildcard_rule_does_not_claim_unrelated_names() -> None:
    class AnyClass(AutoGenerator):
        @requiring("**.Class")
        def any_class(ctx: GenerationContext) -> None:
            ctx.conclude_with("KIND = 'class'")

    AnyClass()
    with pytest.raises(ModuleNotFoundError):
        importlib.import_module("agen_typo_module")
    assert "agen_typo_module" not in sys.modules


def test_import_with_custom_delimiter() -> None:
    loader = AutoGenerator(
        rules=[
            (
                "agen_delim::**::Class",
                lambda ctx: ctx.conclude_with(f"MIDDLE = {ctx.capture(1)!r}"),
            )
        ],
        delimiter="::",
    )
    module = importlib.import_module("agen_delim.Freaking.Class")
    assert module.MIDDLE == "Freaking"
    assert module.__name__ == "agen_delim.Freaking.Class"

    deeper = importlib.import_module("agen_delim.Other.Freaking.Class")
    assert deeper.MIDDLE == "Other::Freaking"
    assert loader.autogenerated("agen_delim::Other::Freaking::Class")
    assert loader.autogenerator_of("agen_delim::Freaking::Class") is loader


def test_unit_spec_uses_requested_module_name() -> None:
    unit = emit("agen_x::y", ["VALUE = 1"])
    spec = unit_spec(unit, "agen_x.y")
    assert spec.name == "agen_x.y"
    assert spec.origin == unit.origin
