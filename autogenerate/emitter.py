"""Assemble collected fragments into module source."""

from __future__ import annotations

import io
import textwrap
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from autogenerate.constants import (
    COMPLETE_MARKER,
    GENERATED_NAME_MARKER,
    ORIGIN_PREFIX,
    PARENT_PACKAGE_MARKER,
)


@dataclass(frozen=True)
class GeneratedUnit:
    name: str
    source: str
    definitions: Mapping[str, Any] = field(default_factory=dict)
    origin: str = ""
    is_package: bool = True

    def open(self) -> io.StringIO:
        return io.StringIO(self.source)


def default_origin(name: str) -> str:
    return f"<{ORIGIN_PREFIX}:{name}>"


def render_source(name: str, fragments: Iterable[str]) -> str:
    lines = [f"{GENERATED_NAME_MARKER} = {name!r}", ""]
    for fragment in fragments:
        lines.append(textwrap.dedent(fragment).strip("\n"))
        lines.append("")
    lines.append(f"{COMPLETE_MARKER} = True")
    return "\n".join(lines) + "\n"


def emit(
    name: str,
    fragments: Iterable[str],
    definitions: Mapping[str, Any] | None = None,
    origin: str | None = None,
) -> GeneratedUnit:
    """Build the unit handed back to the import system.

    Fragments are not validated; syntax errors surface when the unit is
    compiled by the module loader.
    """
    return GeneratedUnit(
        name=name,
        source=render_source(name, fragments),
        definitions=dict(definitions or {}),
        origin=origin or default_origin(name),
    )


def emit_parent(name: str) -> GeneratedUnit:
    """Empty package standing in for a parent of generated modules."""
    return GeneratedUnit(
        name=name,
        source=f"{PARENT_PACKAGE_MARKER} = True\n",
        origin=default_origin(name),
    )
