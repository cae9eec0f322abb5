"""Line-anchored text scanning for import insertion.

Nothing here parses Python. Every helper is a pure function of the buffer
text and a character offset, built from small regular expressions:

- leading comment lines (shebang, coding declaration) are skipped,
- an optional module docstring is skipped with an escape-aware matcher,
- consecutive ``import`` / ``from ... import`` statements make up the import
  block whose end is where new imports go. Statements are single lines,
  except that a parenthesised ``from ... import (...)`` name list is
  consumed up to its closing parenthesis.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

from .models import Identifier


class ScanError(ValueError):
    """Raised when a position in the buffer cannot be determined."""


_COMMENT_OR_BLANK_LINE = re.compile(r"[ \t]*(?:#[^\n]*)?(?:\n|\Z)")
_BLANK_LINES = re.compile(r"(?:[ \t]*\n)*")
_WHITESPACE = re.compile(r"\s*")
_STRING_OPENING = re.compile(r"[rRuU]?(\"\"\"|'''|\"|')")
_IMPORT_LINE = re.compile(
    r"(?:from[ \t]+\S+[ \t]+import[ \t]*\([^)]*\)|from[ \t]+\S+[ \t]+import\b|import\b)[^\n]*(?:\n|\Z)"
)

# Body of a literal up to its closing delimiter; backslash escapes are
# consumed as pairs so an escaped quote never closes the literal.
_CLOSING: Dict[str, "re.Pattern[str]"] = {
    '"""': re.compile(r'(?:[^\\]|\\.)*?"""', re.S),
    "'''": re.compile(r"(?:[^\\]|\\.)*?'''", re.S),
    '"': re.compile(r'(?:[^\\\n]|\\.)*?"', re.S),
    "'": re.compile(r"(?:[^\\\n]|\\.)*?'", re.S),
}


def skip_leading_comments(text: str) -> int:
    """Return the offset just past leading comment lines and blank lines."""
    pos = 0
    while pos < len(text):
        match = _COMMENT_OR_BLANK_LINE.match(text, pos)
        if match is None or match.end() == pos:
            break
        pos = match.end()
    return pos


def skip_module_docstring(text: str, pos: int) -> int:
    """Return the offset just past a string literal starting at *pos*.

    Leading whitespace is skipped first. If no literal starts there, *pos*
    is returned unchanged.

    Raises:
        ScanError: the literal has no closing delimiter.
    """
    start = _WHITESPACE.match(text, pos).end()
    opening = _STRING_OPENING.match(text, start)
    if opening is None:
        return pos
    delimiter = opening.group(1)
    closing = _CLOSING[delimiter].match(text, opening.end())
    if closing is None:
        line = text.count("\n", 0, start) + 1
        raise ScanError(f"Unterminated string literal starting on line {line}")
    return closing.end()


def import_block_start(text: str) -> int:
    """Offset of the first line after leading comments and the module docstring."""
    pos = skip_leading_comments(text)
    end = skip_module_docstring(text, pos)
    if end == pos:
        return pos
    newline = text.find("\n", end)
    return len(text) if newline == -1 else newline + 1


def import_block_end(text: str) -> int:
    """Offset where a new import line should be inserted.

    Walks consecutive import statements (blank lines between them are
    allowed) and stops at the first other line. Whitespace before
    that point is excluded from the result.
    """
    pos = _BLANK_LINES.match(text, import_block_start(text)).end()
    while pos < len(text):
        statement = _IMPORT_LINE.match(text, pos)
        if statement is None:
            break
        pos = _BLANK_LINES.match(text, statement.end()).end()
    while pos > 0 and text[pos - 1].isspace():
        pos -= 1
    return pos


def _is_identifier_char(ch: str, qualified: bool) -> bool:
    return ch.isalnum() or ch == "_" or (qualified and ch == ".")


def identifier_bounds(text: str, point: int, qualified: bool = False) -> Tuple[int, int, str]:
    """Return ``(start, end, identifier)`` for the identifier around *point*.

    With ``qualified=True`` dots are part of the identifier, but never at
    either end of it.
    """
    point = max(0, min(point, len(text)))
    start = point
    while start > 0 and _is_identifier_char(text[start - 1], qualified):
        start -= 1
    end = point
    while end < len(text) and _is_identifier_char(text[end], qualified):
        end += 1
    if qualified:
        while start < end and text[start] == ".":
            start += 1
        while end > start and text[end - 1] == ".":
            end -= 1
    return start, end, text[start:end]


def identifier_at(text: str, point: int, qualified: bool = False) -> Identifier:
    """Like :func:`identifier_bounds` but fails when there is no identifier."""
    start, end, name = identifier_bounds(text, point, qualified)
    if not name:
        raise ScanError(f"No identifier at offset {point}")
    return Identifier(text=name, start=start, end=end)
