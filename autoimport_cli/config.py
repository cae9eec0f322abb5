"""Configuration paths and indexing defaults for autoimport."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

BASE_DIR = Path(os.environ.get("AUTOIMPORT_HOME", str(Path.home() / ".autoimport"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

DEFAULT_EXTENSIONS: List[str] = [".py"]

DEFAULT_SKIP_DIRS: List[str] = [
    ".venv", "venv", "__pycache__", "node_modules", ".git",
    "site-packages", ".tox", ".nox", ".pytest_cache", "build", "dist",
    ".mypy_cache", ".ruff_cache", "htmlcov", ".eggs",
]

# Files or directories whose presence marks a project root
DEFAULT_ROOT_MARKERS: List[str] = [".git", "pyproject.toml", "setup.py", "setup.cfg"]


@dataclass
class Settings:
    """Effective indexing settings for a single command invocation."""
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    skip_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    root_markers: List[str] = field(default_factory=lambda: list(DEFAULT_ROOT_MARKERS))


def load_settings() -> Settings:
    """Build :class:`Settings` from the TOML config file, falling back to defaults."""
    from .config_manager import load_index_config

    section = load_index_config()
    return Settings(
        extensions=list(section.get("extensions", DEFAULT_EXTENSIONS)),
        skip_dirs=list(section.get("skip_dirs", DEFAULT_SKIP_DIRS)),
        root_markers=list(section.get("root_markers", DEFAULT_ROOT_MARKERS)),
    )
