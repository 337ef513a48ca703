import importlib
import sys
from pathlib import Path

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

TEST_MODULE_PREFIX = "agen_"


@pytest.fixture(autouse=True)
def isolated_imports():
    meta_path = list(sys.meta_path)
    path = list(sys.path)
    yield
    sys.meta_path[:] = meta_path
    sys.path[:] = path
    for name in [name for name in sys.modules if name.startswith(TEST_MODULE_PREFIX)]:
        del sys.modules[name]


@pytest.fixture(autouse=True)
def clean_default_registry():
    from autogenerate.registry import default_registry

    default_registry().clear()
    yield
    default_registry().clear()


@pytest.fixture
def registry():
    from autogenerate.registry import GenerationRegistry

    return GenerationRegistry()


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def write_generator_module(tmp_path: Path):
    def _write(name: str, source: str) -> Path:
        path = tmp_path / f"{name}.py"
        path.write_text(source, encoding="utf-8")
        importlib.invalidate_caches()
        return tmp_path

    return _write
