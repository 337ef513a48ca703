"""Import system hooks that serve generated modules."""

from __future__ import annotations

import importlib.abc
import importlib.machinery
import importlib.util
import linecache
import logging
import sys
from types import ModuleType
from typing import TYPE_CHECKING, Optional, Sequence

from autogenerate.emitter import GeneratedUnit, emit_parent
from autogenerate.patterns import to_delimited

if TYPE_CHECKING:
    from autogenerate.loader import AutoGenerator

logger = logging.getLogger(__name__)


class GeneratedModuleLoader(importlib.abc.Loader):
    def __init__(self, unit: GeneratedUnit) -> None:
        self.unit = unit

    def create_module(self, spec: importlib.machinery.ModuleSpec) -> Optional[ModuleType]:
        return None

    def exec_module(self, module: ModuleType) -> None:
        source = self.unit.source
        linecache.cache[self.unit.origin] = (
            len(source),
            None,
            source.splitlines(True),
            self.unit.origin,
        )
        module.__dict__.update(self.unit.definitions)
        code = compile(source, self.unit.origin, "exec")
        exec(code, module.__dict__)

    def get_source(self, fullname: str) -> str:
        return self.unit.source

    def is_package(self, fullname: str) -> bool:
        return self.unit.is_package


def unit_spec(
    unit: GeneratedUnit, fullname: Optional[str] = None
) -> Optional[importlib.machinery.ModuleSpec]:
    return importlib.util.spec_from_loader(
        fullname or unit.name,
        GeneratedModuleLoader(unit),
        origin=unit.origin,
        is_package=unit.is_package,
    )


class AutoGenerateFinder(importlib.abc.MetaPathFinder):
    """``sys.meta_path`` entry backed by one ``AutoGenerator``."""

    def __init__(self, generator: "AutoGenerator") -> None:
        self.generator = generator

    def find_spec(
        self,
        fullname: str,
        path: Optional[Sequence[str]] = None,
        target: Optional[ModuleType] = None,
    ) -> Optional[importlib.machinery.ModuleSpec]:
        name = to_delimited(fullname, self.generator.delimiter)
        unit = self.generator.dispatch(name)
        if unit is None:
            if not self.generator.admits_prefix(name):
                return None
            logger.debug("Synthesizing parent package %s", name)
            unit = emit_parent(name)
        return unit_spec(unit, fullname)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.generator!r})"


def install(finder: AutoGenerateFinder) -> None:
    if finder in sys.meta_path:
        return
    sys.meta_path.append(finder)
    logger.info("Installed %r on sys.meta_path", finder)


def uninstall(finder: AutoGenerateFinder) -> bool:
    if finder not in sys.meta_path:
        return False
    sys.meta_path.remove(finder)
    logger.info("Removed %r from sys.meta_path", finder)
    return True
