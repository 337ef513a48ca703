"""Resolve ``package.module:Attribute`` references to generators."""

from __future__ import annotations

import importlib
from collections.abc import Iterable

from autogenerate.errors import LoaderSpecError
from autogenerate.loader import AutoGenerator
from autogenerate.patterns import PatternLike
from autogenerate.registry import GenerationRegistry


def resolve_reference(reference: str) -> object:
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise LoaderSpecError(reference, "expected 'module:Attribute'")
    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise LoaderSpecError(reference, f"cannot import {module_name}: {exc}") from exc
    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise LoaderSpecError(reference, f"no attribute {attr!r}") from exc
    return target


def load_generator(
    reference: str,
    match_only: Iterable[PatternLike] | None = None,
    registry: GenerationRegistry | None = None,
) -> AutoGenerator:
    """Build an uninstalled generator from a class or instance reference.

    Classes are instantiated with ``match_only``; instances are used as they
    are and cannot take a ``match_only`` override.
    """
    target = resolve_reference(reference)
    if isinstance(target, type) and issubclass(target, AutoGenerator):
        return target(
            match_only=match_only,
            registry=registry if registry is not None else GenerationRegistry(),
            install=False,
        )
    if isinstance(target, AutoGenerator):
        if match_only is not None:
            raise LoaderSpecError(reference, "match_only applies to classes only")
        return target
    raise LoaderSpecError(reference, "not an AutoGenerator class or instance")
