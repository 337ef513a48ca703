"""Provenance of generated modules."""

from __future__ import annotations

import threading
from typing import Any

from autogenerate.errors import DuplicateGenerationError


class GenerationRegistry:
    """Maps generated module names to the loader that produced them.

    The first loader to record a name keeps it. With ``strict=True`` a
    second record for the same name raises instead of being ignored.
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict
        self._entries: dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def strict(self) -> bool:
        return self._strict

    def record(self, name: str, loader: Any) -> bool:
        with self._lock:
            if name in self._entries:
                if self._strict:
                    raise DuplicateGenerationError(name, self._entries[name])
                return False
            self._entries[name] = loader
            return True

    def generated_by(self, name: str) -> Any | None:
        return self._entries.get(name)

    def was_generated(self, name: str) -> bool:
        return name in self._entries

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries


_DEFAULT_REGISTRY = GenerationRegistry()


def default_registry() -> GenerationRegistry:
    return _DEFAULT_REGISTRY
