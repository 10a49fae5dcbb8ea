"""Pytest configuration for resources/tests.

Ensures the repository root and the source tree are on sys.path so tests
can import helpers via absolute package path like `resources.tests.helpers`
and the package without an install.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest

from ld_agent.compatibility import RuntimeEnvironment

BUNDLED_PLUGINS_DIR = ROOT / "plugins"


@pytest.fixture
def plugins_dir(tmp_path: Path) -> Path:
    """An empty plugins directory."""
    directory = tmp_path / "plugins"
    directory.mkdir()
    return directory


@pytest.fixture
def bundled_plugins_dir() -> Path:
    """The plugins directory shipped with the repository."""
    return BUNDLED_PLUGINS_DIR


@pytest.fixture
def write_plugin(plugins_dir: Path):
    """Write a plugin file (or a package plugin) into the plugins directory."""

    def _write(name: str, source: str, package: bool = False, entry_point: str = "__init__.py") -> Path:
        if package:
            package_dir = plugins_dir / name
            package_dir.mkdir(exist_ok=True)
            (package_dir / entry_point).write_text(source)
            return package_dir

        path = plugins_dir / f"{name}.py"
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def environment() -> RuntimeEnvironment:
    """A fixed environment so compatibility results do not depend on the host."""
    return RuntimeEnvironment(platform="linux", runtime_version="3.12.1")
