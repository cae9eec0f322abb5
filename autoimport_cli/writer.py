"""Idempotent insertion of import statements into a buffer.

Two statement forms are written:

- ``from <module> import <name>[, <name>...]``: one line per module; a
  second name for the same module is appended to the existing line.
- ``import <module>[ as <alias>]``: one line per (module, alias) pair,
  never merged.

Existing statements are found with line-anchored regular expressions; only
single-line statements are recognised.
"""

from __future__ import annotations

import logging
import re

from .buffer import Buffer
from .models import ImportEdit
from .scanner import import_block_end

logger = logging.getLogger(__name__)


def from_import_line(module: str, name: str) -> str:
    return f"from {module} import {name}"


def qualified_import_line(module: str, alias: str = "") -> str:
    if alias:
        return f"import {module} as {alias}"
    return f"import {module}"


def _from_import_with_name(module: str, name: str) -> "re.Pattern[str]":
    return re.compile(
        rf"^from[ \t]+{re.escape(module)}[ \t]+import\b[^#;\n]*\b{re.escape(name)}\b",
        re.M,
    )


def _from_import_extendable(module: str) -> "re.Pattern[str]":
    # Group 1 ends after the last imported name, before any trailing
    # whitespace or comment. Parenthesised, continued, star and compound
    # (;) lines are skipped.
    return re.compile(
        rf"^(from[ \t]+{re.escape(module)}[ \t]+import[ \t]+[^#;*\n(\\]*?)[ \t\r]*(?:#[^\n]*)?$",
        re.M,
    )


def _qualified_import(module: str, alias: str) -> "re.Pattern[str]":
    if alias:
        tail = rf"[ \t]+as[ \t]+{re.escape(alias)}\b"
    else:
        tail = r"(?![\w.])(?![ \t]+as\b)"
    return re.compile(rf"^import[ \t]+{re.escape(module)}{tail}", re.M)


def insert_import_line(buffer: Buffer, line: str) -> ImportEdit:
    """Add *line* as a new statement at the end of the import block."""
    position = import_block_end(buffer.text)
    text = f"{line}\n" if position == 0 else f"\n{line}"
    offset = buffer.insert(text, at=position)
    logger.debug("Added '%s' to %s", line, buffer.path)
    return ImportEdit(status="inserted", offset=offset, text=text)


def insert_from_import(buffer: Buffer, module: str, name: str) -> ImportEdit:
    """Make ``name`` importable via ``from module import name``.

    No-op when the name is already imported from *module*; extends an
    existing ``from module import ...`` line when there is one; otherwise
    adds a new line after the import block.
    """
    if _from_import_with_name(module, name).search(buffer.text):
        logger.debug("'%s' is already imported from %s", name, module)
        return ImportEdit(status="already_imported")

    existing = _from_import_extendable(module).search(buffer.text)
    if existing is not None:
        text = f", {name}"
        offset = buffer.insert(text, at=existing.end(1))
        logger.debug("Extended 'from %s import' with %s", module, name)
        return ImportEdit(status="extended", offset=offset, text=text)

    return insert_import_line(buffer, from_import_line(module, name))


def insert_qualified_import(buffer: Buffer, module: str, alias: str = "") -> ImportEdit:
    """Add ``import module [as alias]`` unless that exact statement exists."""
    if _qualified_import(module, alias).search(buffer.text):
        logger.debug("'%s' is already present", qualified_import_line(module, alias))
        return ImportEdit(status="already_imported")
    return insert_import_line(buffer, qualified_import_line(module, alias))
