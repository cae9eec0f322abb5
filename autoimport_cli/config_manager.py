"""Configuration manager for autoimport using TOML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from . import config

logger = logging.getLogger(__name__)


DEFAULT_INDEX_CONFIG: Dict[str, Any] = {
    "extensions": config.DEFAULT_EXTENSIONS,
    "skip_dirs": config.DEFAULT_SKIP_DIRS,
    "root_markers": config.DEFAULT_ROOT_MARKERS,
}


def _config_file(path: Optional[Path] = None) -> Path:
    return path or config.CONFIG_FILE


def load_full_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the entire TOML config (all sections).

    A missing file yields an empty dict. A malformed file is reported as a
    warning and also yields an empty dict, so callers fall back to defaults.
    """
    config_file = _config_file(path)
    if not config_file.exists():
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, exc)
        return {}


def load_index_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the ``[index]`` section merged over the defaults."""
    merged = {key: list(value) for key, value in DEFAULT_INDEX_CONFIG.items()}
    section = load_full_config(path).get("index", {})
    if not isinstance(section, dict):
        logger.warning("Config section [index] is not a table; using defaults")
        return merged
    for key, value in section.items():
        if key not in merged:
            logger.warning("Unknown [index] config key '%s' ignored", key)
            continue
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning("Config key [index].%s must be a list of strings; using default", key)
            continue
        merged[key] = value
    return merged


def save_index_config(values: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Write the ``[index]`` section, preserving any other sections in the file.

    Returns:
        Path of the written config file.
    """
    config_file = _config_file(path)
    full = load_full_config(config_file)
    full["index"] = values
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        toml.dump(full, f)
    return config_file
