"""Per-invocation state handed to generator functions."""

from __future__ import annotations

import importlib
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from autogenerate.errors import ContextClosedError

if TYPE_CHECKING:
    from autogenerate.patterns import PatternMatch
    from autogenerate.rules import Rule


class Outcome(str, Enum):
    EMIT = "emit"
    NEXT_RULE = "next_rule"
    LAST_RULE = "last_rule"


class RuleSignal(Exception):
    """Raised from generator code to steer rule evaluation."""

    outcome: Outcome = Outcome.EMIT


class NextRule(RuleSignal):
    outcome = Outcome.NEXT_RULE


class LastRule(RuleSignal):
    outcome = Outcome.LAST_RULE


class GenerationContext:
    """What a generator sees while building one module.

    ``captures`` holds the text absorbed by each wildcard of the matching
    pattern, in order. Fragments are source text appended to the module
    body; definitions are objects bound into the module namespace before
    the body runs.
    """

    def __init__(
        self, name: str, captures: tuple[str, ...] = (), loader: Any = None
    ) -> None:
        self.name = name
        self.captures = captures
        self.loader = loader
        self._fragments: list[str] = []
        self._definitions: dict[str, Any] = {}
        self._closed = False

    @property
    def fragments(self) -> list[str]:
        return list(self._fragments)

    @property
    def definitions(self) -> dict[str, Any]:
        return dict(self._definitions)

    @property
    def closed(self) -> bool:
        return self._closed

    def capture(self, index: int) -> str:
        """Return capture ``index``, counted from 1 like regex groups."""
        if index < 1:
            raise IndexError(f"Capture index starts at 1, got {index}")
        return self.captures[index - 1]

    def _ensure_open(self) -> None:
        if self._closed:
            raise ContextClosedError(self.name)

    def conclude_with(self, *fragments: str) -> None:
        self._ensure_open()
        self._fragments.extend(fragments)

    def defines(self, attr: str, value: Any) -> Any:
        self._ensure_open()
        self._definitions[attr] = value
        return value

    def uses(self, module_name: str, alias: str | None = None) -> Any:
        self._ensure_open()
        module = importlib.import_module(module_name)
        target = alias or module_name.split(".")[0]
        if alias is None and "." in module_name:
            module = importlib.import_module(target)
        self._definitions[target] = module
        return module

    def next_rule(self) -> None:
        raise NextRule()

    def last_rule(self) -> None:
        raise LastRule()

    def close(self) -> None:
        self._closed = True

    @contextmanager
    def scope(self) -> Iterator["GenerationContext"]:
        try:
            yield self
        finally:
            self.close()


@dataclass
class Invocation:
    outcome: Outcome
    fragments: list[str] = field(default_factory=list)
    definitions: dict[str, Any] = field(default_factory=dict)


Generator = Callable[[GenerationContext], Any]


def invoke(rule: "Rule", match: "PatternMatch", loader: Any = None) -> Invocation:
    """Run one generator and report how rule evaluation should continue.

    Errors other than the two rule signals propagate unchanged.
    """
    context = GenerationContext(match.name, match.captures, loader)
    with context.scope():
        try:
            returned = rule.generator(context)
        except RuleSignal as signal:
            returned = signal.outcome

    outcome = returned if isinstance(returned, Outcome) else Outcome.EMIT
    return Invocation(
        outcome=outcome,
        fragments=context.fragments,
        definitions=context.definitions,
    )
