"""Pytest configuration and fixtures for autoimport tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from autoimport_cli.buffer import Buffer


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Point the config file at an empty temporary home for every test."""
    home = tmp_path_factory.mktemp("autoimport_home")
    monkeypatch.setattr("autoimport_cli.config.BASE_DIR", home)
    monkeypatch.setattr("autoimport_cli.config.CONFIG_FILE", home / "config.toml")
    return home


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to sample test project."""
    return Path(__file__).parent / "fixtures" / "sample_project"


@pytest.fixture
def sample_project(temp_dir: Path, sample_project_path: Path) -> Path:
    """Writable copy of the sample project."""
    target = temp_dir / "sample_project"
    shutil.copytree(sample_project_path, target)
    return target


@pytest.fixture
def make_buffer(temp_dir: Path):
    """Build a buffer for ``main.py`` in a temp dir with the point on *marker*.

    The point lands on the first character of the first occurrence of
    *marker*, or at offset 0 when no marker is given.
    """

    def _make(text: str, marker: str = "", name: str = "main.py") -> Buffer:
        path = temp_dir / name
        path.write_text(text, encoding="utf-8")
        point = text.index(marker) if marker else 0
        return Buffer(text, path, point)

    return _make


@pytest.fixture
def sample_module_source() -> str:
    """Module with top-level and nested definitions."""
    return '''"""Sample module for symbol scanning."""

import os

LIMIT = 10


def foo():
    value = 1
    return value


class Widget:
    size = 3

    def render(self):
        return "widget"


if os.name == "nt":
    def windows_only():
        pass

BAR = 1
'''
