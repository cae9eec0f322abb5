"""Unified-diff previews of buffer edits."""

from __future__ import annotations

import difflib

from .buffer import Buffer


class DiffEngine:
    """Renders what an import command did (or would do) to a file."""

    def create_diff(self, original: str, modified: str, filename: str = "file") -> str:
        """Create unified diff between two versions.

        Args:
            original: Original content
            modified: Modified content
            filename: Name of file for diff header

        Returns:
            Unified diff string, empty when nothing changed
        """
        original_lines = original.splitlines(keepends=True)
        modified_lines = modified.splitlines(keepends=True)

        diff = difflib.unified_diff(
            original_lines,
            modified_lines,
            fromfile=f"a/{filename}",
            tofile=f"b/{filename}",
        )

        return "".join(diff)

    def preview_buffer(self, buffer: Buffer) -> str:
        """Diff of the buffer against the text it was loaded with."""
        return self.create_diff(buffer.original_text, buffer.text, buffer.path.name)
