"""Rule data models and declaration helpers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Union

from autogenerate.constants import DEFAULT_DELIMITER
from autogenerate.context import Generator
from autogenerate.patterns import Pattern, PatternLike, PatternMatch, compile_pattern


@dataclass(frozen=True)
class Rule:
    pattern: Pattern
    generator: Generator
    label: str = ""

    def match(self, name: str) -> PatternMatch | None:
        return self.pattern.match(name)

    @property
    def display_name(self) -> str:
        if self.label:
            return self.label
        return getattr(self.generator, "__qualname__", repr(self.generator))


RuleLike = Union[Rule, tuple[PatternLike, Generator]]


def make_rule(
    item: RuleLike, delimiter: str = DEFAULT_DELIMITER, label: str = ""
) -> Rule:
    if isinstance(item, Rule):
        return item
    pattern, generator = item
    if not callable(generator):
        raise TypeError(f"Generator for {pattern!r} is not callable")
    return Rule(pattern=compile_pattern(pattern, delimiter), generator=generator, label=label)


class RuleSet:
    """Ordered, immutable rules. The first matching rule wins."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)

    @classmethod
    def build(
        cls, items: Iterable[RuleLike], delimiter: str = DEFAULT_DELIMITER
    ) -> "RuleSet":
        return cls(make_rule(item, delimiter) for item in items)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def matching(self, name: str) -> Iterator[tuple[Rule, PatternMatch]]:
        for rule in self._rules:
            match = rule.match(name)
            if match is not None:
                yield rule, match

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __add__(self, other: "RuleSet") -> "RuleSet":
        return RuleSet(self._rules + tuple(other))


@dataclass(frozen=True)
class RequiringDeclaration:
    """Class-body rule created by ``@requiring``."""

    patterns: tuple[PatternLike, ...]
    generator: Generator

    def build(self, loader: Any, delimiter: str) -> list[Rule]:
        label = getattr(self.generator, "__name__", "")
        return [
            Rule(compile_pattern(pattern, delimiter), self.generator, label)
            for pattern in self.patterns
        ]


@dataclass(frozen=True)
class DeclareBlock:
    """Class-body factory created by ``@declare``, evaluated per instance."""

    factory: Callable[[Any], Iterable[RuleLike]]

    def build(self, loader: Any, delimiter: str) -> list[Rule]:
        return [make_rule(item, delimiter) for item in self.factory(loader) or ()]


Declaration = Union[RequiringDeclaration, DeclareBlock]


def requiring(*patterns: PatternLike) -> Callable[[Generator], RequiringDeclaration]:
    """Declare a generator for every module name matching ``patterns``.

    Used inside an ``AutoGenerator`` subclass body::

        class Models(AutoGenerator):
            @requiring("app.models.*")
            def model(ctx):
                ctx.conclude_with(f"TABLE = {ctx.capture(1).lower()!r}")
    """
    if not patterns:
        raise TypeError("requiring() needs at least one pattern")

    def decorator(generator: Generator) -> RequiringDeclaration:
        return RequiringDeclaration(patterns=patterns, generator=generator)

    return decorator


def declare(factory: Callable[[Any], Iterable[RuleLike]]) -> DeclareBlock:
    return DeclareBlock(factory=factory)


def collect_declarations(cls: type) -> list[Declaration]:
    """Declarations of ``cls`` in body order, then those of its bases."""
    declarations: list[Declaration] = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        for attr, value in vars(klass).items():
            if attr in seen:
                continue
            seen.add(attr)
            if isinstance(value, (RequiringDeclaration, DeclareBlock)):
                declarations.append(value)
    return declarations
