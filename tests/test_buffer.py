"""Tests for the in-memory buffer and the diff preview."""

from pathlib import Path

import pytest

from autoimport_cli.buffer import Buffer
from autoimport_cli.diff_engine import DiffEngine


def test_insert_at_point_moves_point():
    """Test insert at point moves point."""
    buf = Buffer("abc", "/tmp/x.py", point=1)
    buf.insert("XY")
    assert buf.text == "aXYbc"
    assert buf.point == 3


def test_insert_after_point_keeps_point():
    """Test insert after point keeps point."""
    buf = Buffer("abc", "/tmp/x.py", point=1)
    buf.insert("Z", at=2)
    assert buf.text == "abZc"
    assert buf.point == 1


def test_goto_clamps():
    """Test goto clamps."""
    buf = Buffer("abc", "/tmp/x.py")
    assert buf.goto(99) == 3
    assert buf.goto(-4) == 0


def test_offset_for_line_and_column():
    """Test offset for line and column."""
    buf = Buffer("import os\n\nvalue = helper()\n", "/tmp/x.py")
    offset = buf.offset_for(3, 8)
    assert buf.text[offset:].startswith("helper")


def test_offset_for_clamps_column_to_line():
    """Test offset for clamps column to line."""
    buf = Buffer("ab\ncd\n", "/tmp/x.py")
    assert buf.offset_for(1, 50) == 2


def test_offset_for_rejects_bad_line():
    """Test offset for rejects bad line."""
    buf = Buffer("ab\n", "/tmp/x.py")
    with pytest.raises(ValueError):
        buf.offset_for(0)
    with pytest.raises(ValueError):
        buf.offset_for(5)


def test_save_only_when_modified(temp_dir: Path):
    """Test save only when modified."""
    path = temp_dir / "mod.py"
    path.write_text("x = 1\n", encoding="utf-8")
    buf = Buffer.from_file(path)
    assert buf.save() is False

    buf.insert("import os\n", at=0)
    assert buf.is_modified
    assert buf.save() is True
    assert path.read_text(encoding="utf-8") == "import os\nx = 1\n"
    assert not buf.is_modified


def test_preview_diff():
    """Test preview diff."""
    buf = Buffer("x = 1\n", "/tmp/mod.py")
    buf.insert("import os\n", at=0)
    diff = DiffEngine().preview_buffer(buf)
    assert "--- a/mod.py" in diff
    assert "+import os" in diff


def test_preview_diff_unchanged():
    """Test preview diff unchanged."""
    buf = Buffer("x = 1\n", "/tmp/mod.py")
    assert DiffEngine().preview_buffer(buf) == ""
