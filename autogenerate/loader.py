"""Rule-driven module generators.

Subclass ``AutoGenerator``, declare rules with ``@requiring`` and create an
instance. The instance appends itself to ``sys.meta_path``; from then on any
import that nothing else can satisfy is matched against its rules::

    class Classes(AutoGenerator):
        @requiring("some.**.klass")
        def middle_names(ctx):
            ctx.conclude_with(f"MIDDLE = {ctx.capture(1)!r}")

    Classes(match_only="**.freaking.klass")

    import some.other.freaking.klass          # MIDDLE == "other.freaking"
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable
from typing import Any, ClassVar, Optional

from autogenerate.constants import DEFAULT_DELIMITER
from autogenerate.context import Invocation, Outcome, invoke
from autogenerate.emitter import GeneratedUnit, emit
from autogenerate.finder import AutoGenerateFinder
from autogenerate.finder import install as install_finder
from autogenerate.finder import uninstall as uninstall_finder
from autogenerate.patterns import (
    Pattern,
    PatternLike,
    canonicalize_name,
    compile_patterns,
)
from autogenerate.registry import GenerationRegistry, default_registry
from autogenerate.rules import RuleLike, RuleSet, collect_declarations, make_rule

logger = logging.getLogger(__name__)


def autogenerated(name: str) -> bool:
    return default_registry().was_generated(canonicalize_name(name))


def autogenerator_of(name: str) -> Optional["AutoGenerator"]:
    return default_registry().generated_by(canonicalize_name(name))


class _ProvenanceQuery:
    """Callable on the class (default registry) or an instance (its registry)."""

    def __init__(self, func: Callable[[GenerationRegistry, str], Any]) -> None:
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, instance: Any, owner: type) -> Callable[[str], Any]:
        if instance is None:
            registry, delimiter = default_registry(), DEFAULT_DELIMITER
        else:
            registry, delimiter = instance.registry, instance.delimiter

        def query(name: str) -> Any:
            return self.func(registry, canonicalize_name(name, delimiter))

        return query


class AutoGenerator:
    delimiter: ClassVar[str] = DEFAULT_DELIMITER

    def __init__(
        self,
        match_only: PatternLike | Iterable[PatternLike] | None = None,
        *,
        rules: Iterable[RuleLike] = (),
        registry: GenerationRegistry | None = None,
        install: bool = True,
        delimiter: str | None = None,
    ) -> None:
        if delimiter is not None:
            self.delimiter = delimiter
        self.registry = registry if registry is not None else default_registry()
        self.match_only: tuple[Pattern, ...] | None = None
        if match_only is not None:
            self.match_only = compile_patterns(match_only, self.delimiter)
        self.rules = self._build_rules(rules)
        self.finder = AutoGenerateFinder(self)
        if install:
            self.install()

    def _build_rules(self, extra: Iterable[RuleLike]) -> RuleSet:
        built = []
        for declaration in collect_declarations(type(self)):
            built.extend(declaration.build(self, self.delimiter))
        built.extend(make_rule(item, self.delimiter) for item in extra)
        return RuleSet(built)

    def install(self) -> None:
        install_finder(self.finder)

    def uninstall(self) -> bool:
        return uninstall_finder(self.finder)

    def allows(self, name: str) -> bool:
        if self.match_only is None:
            return True
        return any(pattern.matches(name) for pattern in self.match_only)

    def admits_prefix(self, name: str) -> bool:
        """True if this generator could produce a module nested under ``name``."""
        module = canonicalize_name(name, self.delimiter)
        if self.match_only is not None and not any(
            pattern.matches(module)
            or pattern.admits_prefix(module, require_literal=False)
            for pattern in self.match_only
        ):
            return False
        return any(rule.pattern.admits_prefix(module) for rule in self.rules)

    def dispatch(self, name: str) -> GeneratedUnit | None:
        """Generate ``name`` from the first matching rule.

        Returns None when this generator has nothing to say about the name.
        Errors raised by a generator propagate unchanged.
        """
        module = canonicalize_name(name, self.delimiter)
        if not self.allows(module):
            logger.debug("%s not allowed by match_only of %r", module, self)
            return None

        for rule, match in self.rules.matching(module):
            invocation = invoke(rule, match, loader=self)
            if invocation.outcome == Outcome.NEXT_RULE:
                logger.debug("%s: rule %s passed to next rule", module, rule.display_name)
                continue
            if invocation.outcome == Outcome.LAST_RULE:
                logger.debug("%s: rule %s stopped rule evaluation", module, rule.display_name)
            return self._conclude(module, invocation)

        logger.debug("%s: no rule matched in %r", module, self)
        return None

    def _conclude(self, name: str, invocation: Invocation) -> GeneratedUnit:
        self.registry.record(name, self)
        logger.debug("%s generated by %r", name, self)
        return emit(name, invocation.fragments, invocation.definitions)

    @_ProvenanceQuery
    def autogenerated(registry: GenerationRegistry, name: str) -> bool:
        return registry.was_generated(name)

    @_ProvenanceQuery
    def autogenerator_of(
        registry: GenerationRegistry, name: str
    ) -> Optional["AutoGenerator"]:
        return registry.generated_by(name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} rules={len(self.rules)}>"
