"""In-memory editable text with a cursor, standing in for an editor buffer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class Buffer:
    """Text of one source file plus a point (cursor offset).

    Insertions at or before the point push the point right, the same way an
    editor keeps the cursor on the text it was on.
    """

    def __init__(self, text: str, path: Union[str, Path], point: int = 0):
        self.text = text
        self.path = Path(path)
        self._original = text
        self.point = 0
        self.goto(point)

    @classmethod
    def from_file(cls, path: Union[str, Path], point: int = 0) -> "Buffer":
        """Load *path* as UTF-8 text."""
        file_path = Path(path)
        return cls(file_path.read_text(encoding="utf-8"), file_path, point)

    @property
    def original_text(self) -> str:
        return self._original

    @property
    def is_modified(self) -> bool:
        return self.text != self._original

    def goto(self, offset: int) -> int:
        """Move the point, clamped to the buffer, and return it."""
        self.point = max(0, min(offset, len(self.text)))
        return self.point

    def insert(self, text: str, at: Optional[int] = None) -> int:
        """Insert *text* at *at* (default: the point) and return the offset used."""
        offset = self.point if at is None else max(0, min(at, len(self.text)))
        self.text = self.text[:offset] + text + self.text[offset:]
        if offset <= self.point:
            self.point += len(text)
        logger.debug("Inserted %r at offset %d in %s", text, offset, self.path)
        return offset

    def offset_for(self, line: int, column: int = 0) -> int:
        """Offset of 1-based *line* and 0-based *column*.

        Raises:
            ValueError: the line is outside the buffer.
        """
        if line < 1:
            raise ValueError(f"Line numbers start at 1, got {line}")
        lines = self.text.splitlines(keepends=True)
        if line > max(len(lines), 1):
            raise ValueError(f"Line {line} is past the end of {self.path} ({len(lines)} lines)")
        offset = sum(len(chunk) for chunk in lines[: line - 1])
        current = lines[line - 1].rstrip("\r\n") if lines else ""
        return offset + max(0, min(column, len(current)))

    def save(self) -> bool:
        """Write the buffer back to its path if it changed."""
        if not self.is_modified:
            return False
        self.path.write_text(self.text, encoding="utf-8")
        self._original = self.text
        return True
