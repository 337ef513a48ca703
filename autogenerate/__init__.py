from autogenerate.context import GenerationContext, LastRule, NextRule, Outcome
from autogenerate.emitter import GeneratedUnit, emit
from autogenerate.errors import (
    AutoGenerateError,
    ContextClosedError,
    DuplicateGenerationError,
    LoaderSpecError,
    MalformedPatternError,
)
from autogenerate.loader import AutoGenerator, autogenerated, autogenerator_of
from autogenerate.patterns import Pattern, PatternMatch, canonicalize_name, compile_pattern
from autogenerate.registry import GenerationRegistry, default_registry
from autogenerate.rules import Rule, RuleSet, declare, requiring

__all__ = [
    "AutoGenerateError",
    "AutoGenerator",
    "ContextClosedError",
    "DuplicateGenerationError",
    "GeneratedUnit",
    "GenerationContext",
    "GenerationRegistry",
    "LastRule",
    "LoaderSpecError",
    "MalformedPatternError",
    "NextRule",
    "Outcome",
    "Pattern",
    "PatternMatch",
    "Rule",
    "RuleSet",
    "autogenerated",
    "autogenerator_of",
    "canonicalize_name",
    "compile_pattern",
    "declare",
    "default_registry",
    "emit",
    "requiring",
]
