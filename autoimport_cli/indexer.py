"""Project-wide module index: module name -> top-level symbols.

The index is rebuilt from disk on every request. Symbols are found with a
line-anchored regular-expression scan, so only column-0 definitions and
assignments are seen; nested and conditional definitions are ignored.
"""

from __future__ import annotations

import keyword
import logging
import os
import re
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from . import config
from .models import ModuleIndex

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_DEFINITION = re.compile(r"^(?:async[ \t]+def|def|class)[ \t]+([^\W\d]\w*)", re.M)
_ASSIGNMENT = re.compile(r"^([^\W\d]\w*)[ \t]*(?::[^=\n]*)?=(?!=)", re.M)


# ---------------------------------------------------------------------------
# Module names
# ---------------------------------------------------------------------------

def derive_module_name(file_path: PathLike, reference_file_path: PathLike) -> Optional[str]:
    """Dotted module name of *file_path* relative to the edited file's tree.

    The shared root is the common directory of both files. Returns ``None``
    when the two paths share nothing but the filesystem root.

    Example:
        ``/proj/src/app/utils/helpers.py`` seen from ``/proj/src/app/main.py``
        is ``utils.helpers``.
    """
    path = os.path.abspath(os.fspath(file_path))
    reference = os.path.abspath(os.fspath(reference_file_path))
    try:
        common = os.path.commonpath([os.path.dirname(path), os.path.dirname(reference)])
    except ValueError:
        # Different drives on Windows
        return None
    if os.path.dirname(common) == common:
        return None

    relative = os.path.relpath(path, common)
    stem, _ext = os.path.splitext(relative)
    parts = [p for p in stem.split(os.sep) if p]
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    if not parts:
        return None
    return ".".join(parts)


# ---------------------------------------------------------------------------
# Symbols
# ---------------------------------------------------------------------------

def scan_symbols(source: str) -> List[str]:
    """Top-level definitions followed by top-level assignments, in file order."""
    definitions = _DEFINITION.findall(source)
    assignments = [name for name in _ASSIGNMENT.findall(source) if not keyword.iskeyword(name)]
    return definitions + assignments


def top_level_symbols(file_path: PathLike) -> List[str]:
    """Read *file_path* and return its top-level symbols.

    Unreadable or undecodable files contribute no symbols.
    """
    try:
        source = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", file_path, exc)
        return []
    return scan_symbols(source)


def build_index(files: Iterable[PathLike], reference_file_path: PathLike) -> ModuleIndex:
    """Map each file's module name to its top-level symbols.

    Files whose module name cannot be derived are left out.
    """
    started = time.perf_counter()
    index: ModuleIndex = {}
    skipped = 0
    for file_path in files:
        module = derive_module_name(file_path, reference_file_path)
        if not module:
            logger.debug("No module name for %s relative to %s", file_path, reference_file_path)
            skipped += 1
            continue
        index[module] = top_level_symbols(file_path)
    logger.debug(
        "Indexed %d modules (%d skipped) in %.3fs",
        len(index), skipped, time.perf_counter() - started,
    )
    return index


# ---------------------------------------------------------------------------
# Project files
# ---------------------------------------------------------------------------

def find_project_root(path: PathLike, markers: Sequence[str] = tuple(config.DEFAULT_ROOT_MARKERS)) -> Path:
    """Nearest ancestor directory of *path* containing one of *markers*.

    Falls back to the directory of *path* itself.
    """
    start = Path(path).resolve()
    if not start.is_dir():
        start = start.parent
    for directory in (start, *start.parents):
        if any((directory / marker).exists() for marker in markers):
            return directory
    return start


def list_project_files(
    root: PathLike,
    extensions: Sequence[str] = tuple(config.DEFAULT_EXTENSIONS),
    skip_dirs: Sequence[str] = tuple(config.DEFAULT_SKIP_DIRS),
) -> List[Path]:
    """All source files under *root*, sorted, skipping *skip_dirs* anywhere in the tree."""
    root_path = Path(root).resolve()
    skipped = set(skip_dirs)
    files: List[Path] = []
    for ext in extensions:
        for file_path in root_path.rglob(f"*{ext}"):
            relative_parts = file_path.relative_to(root_path).parts[:-1]
            if any(part in skipped or part.endswith(".egg-info") for part in relative_parts):
                continue
            if file_path.is_file():
                files.append(file_path)
    return sorted(set(files))
